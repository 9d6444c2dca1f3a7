"""Token issuance and record-bound verification."""

import calendar
import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

import jwt
from pydantic import ValidationError

from tokengen.core.duration import DurationLike, parse_duration
from tokengen.crypto.jwt_codec import decode_complete, sign_token, verify_signature
from tokengen.crypto.keyring import Clock, KeyRing, utc_now
from tokengen.crypto.keys import load_rsa_public_key
from tokengen.crypto.types import (
    IssuedToken,
    TokenRecord,
    VerificationResult,
    VerificationStatus,
)

logger = logging.getLogger(__name__)

REQUIRED_RECORD_FIELDS = ("id", "issuer", "subject", "key")


class TokenIssuer:
    """Signs tokens with the key ring's active key and verifies them against records."""

    def __init__(
        self,
        key_ring: KeyRing,
        issuer_id: str,
        token_lifetime: timedelta,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._key_ring = key_ring
        self._issuer_id = issuer_id
        self._token_lifetime = token_lifetime
        self._clock = clock or utc_now

    @property
    def issuer_id(self) -> str:
        """Value written to the ``iss`` claim and record issuer."""
        return self._issuer_id

    @property
    def token_lifetime(self) -> timedelta:
        """Lifetime used when ``issue`` gets no duration."""
        return self._token_lifetime

    def issue(
        self,
        subject: str,
        *,
        duration: DurationLike | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> IssuedToken:
        """Sign a token for ``subject`` and return it with its record.

        ``iss``, ``sub``, ``iat`` and ``exp`` are applied after the caller's
        claims and always win.
        """
        if not isinstance(subject, str) or not subject:
            raise ValueError("subject must be a non-empty string")
        lifetime = (
            self._token_lifetime if duration is None else parse_duration(duration)
        )

        key_pair = self._key_ring.get_active_key_pair()
        issued = self._clock().replace(microsecond=0)
        expires = issued + lifetime

        claims = dict(payload or {})
        claims.update(iss=self._issuer_id, sub=subject, iat=issued, exp=expires)
        token = sign_token(claims, key_pair.private_key_pem, key_pair.kid)
        logger.debug("Issued token for %s with key %s", subject, key_pair.kid)

        return IssuedToken(
            token=token,
            record=TokenRecord(
                id=key_pair.kid,
                issuer=self._issuer_id,
                subject=subject,
                key=key_pair.public_key_pem,
                issued=issued,
                expires=expires,
            ),
        )

    def verify(
        self,
        token: str | None,
        *,
        record: TokenRecord | Mapping[str, Any] | None = None,
    ) -> VerificationResult:
        """Verify ``token`` using only the supplied record. Never raises."""
        if not isinstance(token, str) or not token:
            return VerificationResult.failure(VerificationStatus.INVALID_TOKEN)
        try:
            header = decode_complete(token).header
        except jwt.PyJWTError:
            return VerificationResult.failure(VerificationStatus.INVALID_TOKEN)

        if record is None:
            return VerificationResult.failure(VerificationStatus.NO_RECORD)
        parsed = _parse_record(record)
        if parsed is None:
            return VerificationResult.failure(VerificationStatus.INVALID_RECORD)

        if header.get("kid") != parsed.id:
            logger.debug("Rejected token: kid does not match record %s", parsed.id)
            return VerificationResult.failure(VerificationStatus.INVALID_TOKEN)
        try:
            public_key = load_rsa_public_key(parsed.key)
        except ValueError as exc:
            logger.debug("Rejected token for record %s: %s", parsed.id, exc)
            return VerificationResult.failure(VerificationStatus.INVALID_TOKEN)
        try:
            claims = verify_signature(token, public_key, parsed.issuer)
        except jwt.PyJWTError as exc:
            logger.debug("Rejected token for record %s: %s", parsed.id, exc)
            return VerificationResult.failure(VerificationStatus.INVALID_TOKEN)
        if not _claims_match_record(claims, parsed):
            logger.debug("Rejected token: claims do not match record %s", parsed.id)
            return VerificationResult.failure(VerificationStatus.INVALID_TOKEN)

        return VerificationResult(
            success=True,
            status=VerificationStatus.SUCCESS,
            subject=parsed.subject,
            payload=claims,
        )


def _parse_record(record: TokenRecord | Mapping[str, Any]) -> TokenRecord | None:
    """Return a validated record, or None if it is malformed."""
    if isinstance(record, TokenRecord):
        data = record.model_dump()
    elif isinstance(record, Mapping):
        data = dict(record)
    else:
        return None
    if any(not data.get(field) for field in REQUIRED_RECORD_FIELDS):
        return None
    try:
        return TokenRecord.model_validate(data)
    except ValidationError:
        return None


def _epoch_seconds(value: datetime) -> int:
    return calendar.timegm(value.utctimetuple())


def _claims_match_record(claims: dict[str, Any], record: TokenRecord) -> bool:
    """Bind subject and validity window to the record that was issued with them."""
    return (
        claims.get("sub") == record.subject
        and claims.get("iat") == _epoch_seconds(record.issued)
        and claims.get("exp") == _epoch_seconds(record.expires)
    )
