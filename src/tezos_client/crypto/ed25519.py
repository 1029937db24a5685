"""
Ed25519 cryptographic operations for Tezos keys.

Provides seed expansion, detached signing and verification in the shape of
libsodium's crypto_sign API: secret keys are 64 bytes (seed followed by the
public key) and signatures are 64 bytes.
"""

from __future__ import annotations
from typing import Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..runtime.errors import InvalidKeyError, InvalidSignatureError

SEED_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
SECRET_KEY_LENGTH = 64
SIGNATURE_LENGTH = 64


class Ed25519PublicKey:
    """
    Ed25519 public key.

    Provides verification operations and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Args:
            public_key_bytes: 32-byte Ed25519 public key

        Raises:
            InvalidKeyError: If key is invalid
        """
        if len(public_key_bytes) != PUBLIC_KEY_LENGTH:
            raise InvalidKeyError(f"Ed25519 public key must be 32 bytes, got {len(public_key_bytes)}")

        self._key_bytes = bytes(public_key_bytes)
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(self._key_bytes)
        except ValueError as e:
            raise InvalidKeyError(f"Invalid Ed25519 public key: {e}", cause=e) from e

    def to_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a detached signature against a message.

        Args:
            signature: 64-byte Ed25519 signature
            message: Message that was signed

        Returns:
            True if the signature matches, False otherwise

        Raises:
            InvalidSignatureError: If the signature is malformed
        """
        if len(signature) != SIGNATURE_LENGTH:
            raise InvalidSignatureError(f"Ed25519 signature must be 64 bytes, got {len(signature)}")

        try:
            self._crypto_key.verify(bytes(signature), bytes(message))
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ed25519PublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __repr__(self) -> str:
        return f"Ed25519PublicKey({self._key_bytes.hex()})"


class Ed25519PrivateKey:
    """
    Ed25519 private key built from a 32-byte seed.
    """

    def __init__(self, seed: bytes):
        if len(seed) != SEED_LENGTH:
            raise InvalidKeyError(f"Ed25519 seed must be 32 bytes, got {len(seed)}")

        self._seed = bytes(seed)
        self._crypto_key = CryptoEd25519PrivateKey.from_private_bytes(self._seed)
        self._public_key = Ed25519PublicKey(
            self._crypto_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )

    @classmethod
    def from_secret_key(cls, secret_key: bytes) -> Ed25519PrivateKey:
        """Create from a 64-byte expanded secret key or a 32-byte seed."""
        if len(secret_key) not in (SEED_LENGTH, SECRET_KEY_LENGTH):
            raise InvalidKeyError(f"Ed25519 secret key must be 32 or 64 bytes, got {len(secret_key)}")
        return cls(secret_key[:SEED_LENGTH])

    def public_key(self) -> Ed25519PublicKey:
        """Get the corresponding public key."""
        return self._public_key

    def seed(self) -> bytes:
        return self._seed

    def expanded(self) -> bytes:
        """Get the 64-byte secret key (seed followed by public key)."""
        return self._seed + self._public_key.to_bytes()

    def sign(self, message: bytes) -> bytes:
        """Sign a message and return the 64-byte signature."""
        return self._crypto_key.sign(bytes(message))

    def __repr__(self) -> str:
        return f"Ed25519PrivateKey(public={self._public_key.to_bytes().hex()})"


def seed_keypair(seed: bytes) -> Tuple[bytes, bytes]:
    """
    Expand a seed into a keypair.

    Args:
        seed: 32-byte seed

    Returns:
        Tuple of (32-byte public key, 64-byte secret key)
    """
    private_key = Ed25519PrivateKey(seed)
    return private_key.public_key().to_bytes(), private_key.expanded()


def sign_detached(message: bytes, secret_key: bytes) -> bytes:
    """Sign a message with a 64-byte secret key (or bare seed)."""
    return Ed25519PrivateKey.from_secret_key(secret_key).sign(message)


def verify_detached(signature: bytes, message: bytes, public_key: bytes) -> bool:
    """
    Verify a detached signature.

    Returns False on mismatch and raises InvalidSignatureError on malformed
    input.
    """
    try:
        verifier = Ed25519PublicKey(public_key)
    except InvalidKeyError as e:
        raise InvalidSignatureError(f"Cannot verify with public key: {e.message}", cause=e) from e
    return verifier.verify(signature, message)


__all__ = [
    "Ed25519PublicKey",
    "Ed25519PrivateKey",
    "seed_keypair",
    "sign_detached",
    "verify_detached",
    "SEED_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "SECRET_KEY_LENGTH",
    "SIGNATURE_LENGTH",
]
