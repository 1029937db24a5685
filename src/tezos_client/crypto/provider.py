"""
Primitive provider interface.

The key core never implements cryptography itself. Everything it needs is
reached through a PrimitiveProvider, so alternative backends can be plugged
into a Key.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Tuple, Union

from . import ed25519, hash_utils, secp256k1, secretbox


class PrimitiveProvider(ABC):
    """
    Abstract capability interface for primitive cryptography.
    """

    @abstractmethod
    def seed_keypair(self, seed: bytes) -> Tuple[bytes, bytes]:
        """
        Expand a 32-byte Ed25519 seed.

        Returns:
            Tuple of (32-byte public key, 64-byte secret key)
        """

    @abstractmethod
    def sign_detached(self, message: bytes, secret_key: bytes) -> bytes:
        """Ed25519 detached signature over message."""

    @abstractmethod
    def verify_detached(self, signature: bytes, message: bytes, public_key: bytes) -> bool:
        """
        Ed25519 detached verification.

        Returns False on mismatch; raises on malformed input.
        """

    @abstractmethod
    def generic_hash(self, length: int, data: bytes) -> bytes:
        """BLAKE2b digest of the given length."""

    @abstractmethod
    def secp256k1_public_key(self, secret_key: bytes) -> bytes:
        """Compressed secp256k1 public key for a 32-byte scalar."""

    @abstractmethod
    def pbkdf2_sha512(self, password: Union[str, bytes], salt: Union[str, bytes],
                      iterations: int, length: int) -> bytes:
        """PBKDF2-HMAC-SHA512."""

    @abstractmethod
    def open_easy(self, ciphertext: bytes, nonce: bytes, key: bytes) -> bytes:
        """Authenticated symmetric decryption; raises on tag mismatch."""

    @abstractmethod
    def seal_easy(self, plaintext: bytes, nonce: bytes, key: bytes) -> bytes:
        """Authenticated symmetric encryption."""


class DefaultPrimitiveProvider(PrimitiveProvider):
    """
    Provider backed by cryptography, PyNaCl, ecdsa and hashlib.
    """

    def seed_keypair(self, seed: bytes) -> Tuple[bytes, bytes]:
        return ed25519.seed_keypair(seed)

    def sign_detached(self, message: bytes, secret_key: bytes) -> bytes:
        return ed25519.sign_detached(message, secret_key)

    def verify_detached(self, signature: bytes, message: bytes, public_key: bytes) -> bool:
        return ed25519.verify_detached(signature, message, public_key)

    def generic_hash(self, length: int, data: bytes) -> bytes:
        return hash_utils.generic_hash(length, data)

    def secp256k1_public_key(self, secret_key: bytes) -> bytes:
        return secp256k1.public_key_from_secret(secret_key)

    def pbkdf2_sha512(self, password: Union[str, bytes], salt: Union[str, bytes],
                      iterations: int, length: int) -> bytes:
        return hash_utils.pbkdf2_sha512(password, salt, iterations, length)

    def open_easy(self, ciphertext: bytes, nonce: bytes, key: bytes) -> bytes:
        return secretbox.open_easy(ciphertext, nonce, key)

    def seal_easy(self, plaintext: bytes, nonce: bytes, key: bytes) -> bytes:
        return secretbox.seal_easy(plaintext, nonce, key)

    def __repr__(self) -> str:
        return "DefaultPrimitiveProvider()"


_default_provider = DefaultPrimitiveProvider()


def get_default_provider() -> PrimitiveProvider:
    """Get the shared default provider."""
    return _default_provider


__all__ = [
    "PrimitiveProvider",
    "DefaultPrimitiveProvider",
    "get_default_provider",
]
