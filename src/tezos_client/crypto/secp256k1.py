"""
SECP256K1 operations for Tezos ``sp`` keys.

Only public key derivation is provided; ``sp`` signing is not supported by
the key core.
"""

from __future__ import annotations
import secrets

from ecdsa import SECP256k1, SigningKey
from ecdsa.keys import MalformedPointError

from ..runtime.errors import InvalidKeyError

SECRET_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 33


def public_key_from_secret(secret_key: bytes) -> bytes:
    """
    Derive the compressed public key for a secret scalar.

    Args:
        secret_key: 32-byte big-endian scalar

    Returns:
        33-byte SEC1 compressed public key

    Raises:
        InvalidKeyError: If the scalar is the wrong size or out of range
    """
    if len(secret_key) != SECRET_KEY_LENGTH:
        raise InvalidKeyError(f"Secp256k1 secret key must be 32 bytes, got {len(secret_key)}")

    try:
        signing_key = SigningKey.from_string(bytes(secret_key), curve=SECP256k1)
    except MalformedPointError as e:
        raise InvalidKeyError(f"Invalid secp256k1 secret key: {e}", cause=e) from e

    return signing_key.get_verifying_key().to_string("compressed")


def generate_secret() -> bytes:
    """Generate a random 32-byte secret scalar in [1, n-1]."""
    while True:
        candidate = secrets.token_bytes(SECRET_KEY_LENGTH)
        if 0 < int.from_bytes(candidate, "big") < SECP256k1.order:
            return candidate


__all__ = [
    "public_key_from_secret",
    "generate_secret",
    "SECRET_KEY_LENGTH",
    "PUBLIC_KEY_LENGTH",
]
