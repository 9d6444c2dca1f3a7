"""Current signing key pair with lazy, lifetime-based rotation."""

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from tokengen.crypto.keys import generate_rsa_keypair
from tokengen.crypto.types import KeyPair

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class KeyRing:
    """Owns exactly one current key pair and replaces it once it ages out.

    Rotation only happens inside ``get_active_key_pair`` and
    ``force_regenerate``; there is no background timer. A zero lifetime is
    nonce mode: every call hands out a brand-new pair.
    """

    def __init__(self, key_lifetime: timedelta, *, clock: Clock | None = None) -> None:
        if key_lifetime < timedelta(0):
            raise ValueError("key_lifetime must not be negative")
        self._key_lifetime = key_lifetime
        self._clock = clock or utc_now
        self._lock = threading.Lock()
        self._current: KeyPair | None = None

    @property
    def key_lifetime(self) -> timedelta:
        """Maximum age of a key pair before it is replaced."""
        return self._key_lifetime

    @property
    def nonce_mode(self) -> bool:
        """Whether every access hands out a fresh key pair."""
        return self._key_lifetime == timedelta(0)

    def get_active_key_pair(self) -> KeyPair:
        """Return the current key pair, rotating it first if it has expired."""
        with self._lock:
            now = self._clock()
            reason = self._rotation_reason(now)
            if reason is not None:
                self._replace(now, reason)
            assert self._current is not None
            return self._current

    def force_regenerate(self) -> KeyPair:
        """Replace the current key pair regardless of its age."""
        with self._lock:
            return self._replace(self._clock(), "forced")

    def _rotation_reason(self, now: datetime) -> str | None:
        if self._current is None:
            return "initial"
        if self.nonce_mode:
            return "nonce"
        if now - self._current.created_at >= self._key_lifetime:
            return "expired"
        return None

    def _replace(self, now: datetime, reason: str) -> KeyPair:
        previous = self._current.kid if self._current is not None else None
        self._current = generate_rsa_keypair(created_at=now)
        logger.info(
            "Rotated signing key (%s): %s -> %s", reason, previous, self._current.kid
        )
        return self._current
