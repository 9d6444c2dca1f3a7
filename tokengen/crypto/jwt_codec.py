"""JWT signing and verification using RS256."""

from typing import Any

import jwt
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from jwt.types import Options
from pydantic import BaseModel

ALGORITHM = "RS256"
REQUIRED_CLAIMS = ["iss", "sub", "iat", "exp"]


class DecodedToken(BaseModel):
    """Unverified header and payload of a compact JWT."""

    header: dict[str, Any]
    payload: dict[str, Any]


def sign_token(claims: dict[str, Any], private_key_pem: str, kid: str) -> str:
    """Sign claims with an RSA private key, tagging the header with ``kid``."""
    return jwt.encode(
        claims,
        private_key_pem,
        algorithm=ALGORITHM,
        headers={"kid": kid},
    )


def verify_signature(
    token: str, public_key: RSAPublicKey | str, issuer: str
) -> dict[str, Any]:
    """Verify signature, issuer, and expiry; return the decoded claims.

    Raises a ``jwt.PyJWTError`` subclass on any failure.
    """
    opts: Options = {"require": REQUIRED_CLAIMS, "verify_aud": False}
    return jwt.decode(
        token,
        public_key,
        algorithms=[ALGORITHM],
        issuer=issuer,
        options=opts,
    )


def decode_complete(token: str) -> DecodedToken:
    """Decode header and payload without verifying the signature."""
    header = jwt.get_unverified_header(token)
    payload = jwt.decode(token, options={"verify_signature": False})
    return DecodedToken(header=header, payload=payload)
