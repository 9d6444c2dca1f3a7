"""Public token generator: issue, verify, and rotate keys."""

from collections.abc import Mapping
from typing import Any

import uuid_utils

from tokengen.core.duration import DurationLike, parse_duration
from tokengen.core.settings import GeneratorSettings
from tokengen.crypto.keyring import Clock, KeyRing
from tokengen.crypto.types import IssuedToken, TokenRecord, VerificationResult
from tokengen.tokens.issuer import TokenIssuer


class JWTGenerator:
    """Issues RS256 tokens from a rotating key ring and verifies them by record."""

    def __init__(
        self,
        *,
        id: str | None = None,  # noqa: A002
        key_lifetime: DurationLike | None = None,
        token_lifetime: DurationLike | None = None,
        settings: GeneratorSettings | None = None,
        clock: Clock | None = None,
    ) -> None:
        settings = settings or GeneratorSettings()
        self._id = id or settings.id or str(uuid_utils.uuid7())
        self._key_ring = KeyRing(
            settings.key_lifetime
            if key_lifetime is None
            else parse_duration(key_lifetime),
            clock=clock,
        )
        self._issuer = TokenIssuer(
            self._key_ring,
            self._id,
            settings.token_lifetime
            if token_lifetime is None
            else parse_duration(token_lifetime),
            clock=clock,
        )

    @property
    def id(self) -> str:
        """Generator identity, used as the token issuer."""
        return self._id

    @property
    def key_ring(self) -> KeyRing:
        """Key ring holding the current signing key."""
        return self._key_ring

    @property
    def issuer(self) -> TokenIssuer:
        """Issuer that signs and verifies this generator's tokens."""
        return self._issuer

    async def new_token(
        self,
        subject: str,
        *,
        duration: DurationLike | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> IssuedToken:
        """Issue a token for ``subject`` along with its verification record."""
        return self._issuer.issue(subject, duration=duration, payload=payload)

    async def verify_token(
        self,
        token: str | None,
        *,
        record: TokenRecord | Mapping[str, Any] | None = None,
    ) -> VerificationResult:
        """Verify ``token`` against ``record``; failures come back as results."""
        return self._issuer.verify(token, record=record)

    def generate_keys(self) -> None:
        """Force an immediate key rotation."""
        self._key_ring.force_regenerate()


def create_generator(settings: GeneratorSettings | None = None) -> JWTGenerator:
    """Build a generator from environment-driven settings."""
    return JWTGenerator(settings=settings or GeneratorSettings())
