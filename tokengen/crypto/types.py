"""Type definitions for key pairs, token records, and verification results."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict


class KeyPair(BaseModel):
    """An RSA keypair for JWT signing, identified by ``kid``."""

    model_config = ConfigDict(frozen=True)

    kid: str
    private_key_pem: str
    public_key_pem: str
    created_at: datetime


class TokenRecord(BaseModel):
    """Caller-held binding of a subject to the key that signed its token."""

    id: str
    issuer: str
    subject: str
    key: str
    issued: datetime
    expires: datetime


class IssuedToken(BaseModel):
    """A signed token and the record needed to verify it."""

    token: str
    record: TokenRecord


class VerificationStatus(StrEnum):
    """Terminal outcome of a token verification."""

    SUCCESS = "success"
    NO_RECORD = "noRecordError"
    INVALID_RECORD = "invalidRecordError"
    INVALID_TOKEN = "invalidTokenError"


class VerificationResult(BaseModel):
    """Outcome of verifying a token against a record."""

    success: bool
    status: VerificationStatus
    subject: str | None = None
    payload: dict[str, Any] | None = None

    @classmethod
    def failure(cls, status: VerificationStatus) -> "VerificationResult":
        return cls(success=False, status=status)


class JWKEntry(BaseModel):
    """Single JWK entry for a record's verification key."""

    kty: str = "RSA"
    use: str = "sig"
    alg: str = "RS256"
    kid: str
    n: str
    e: str
