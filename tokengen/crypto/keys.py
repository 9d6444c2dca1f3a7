"""RSA signing key generation and JWK conversion."""

import base64
from datetime import datetime

import uuid_utils
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from tokengen.crypto.types import JWKEntry, KeyPair, TokenRecord

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


def generate_rsa_keypair(created_at: datetime) -> KeyPair:
    """Generate a new RSA-2048 keypair with a fresh uuid7 ``kid``."""
    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=RSA_KEY_SIZE,
    )
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return KeyPair(
        kid=str(uuid_utils.uuid7()),
        private_key_pem=private_pem,
        public_key_pem=public_pem,
        created_at=created_at,
    )


def _int_to_base64url(value: int) -> str:
    """Encode an integer as base64url without padding."""
    byte_length = (value.bit_length() + 7) // 8
    raw = value.to_bytes(byte_length, byteorder="big")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def load_rsa_public_key(public_key_pem: str) -> RSAPublicKey:
    """Load a PEM public key, raising ValueError unless it is RSA."""
    try:
        loaded = serialization.load_pem_public_key(public_key_pem.encode())
    except UnsupportedAlgorithm as exc:
        raise ValueError("unsupported public key") from exc
    if not isinstance(loaded, RSAPublicKey):
        raise ValueError("not an RSA public key")
    return loaded


def record_to_jwk(record: TokenRecord) -> JWKEntry:
    """Publish a record's verification key as a JWK."""
    numbers = load_rsa_public_key(record.key).public_numbers()
    return JWKEntry(
        kid=record.id,
        n=_int_to_base64url(numbers.n),
        e=_int_to_base64url(numbers.e),
    )
