"""
Hash utilities for Tezos keys.

Provides the BLAKE2b generic hash and PBKDF2-HMAC-SHA512 key stretching.
"""

import hashlib
from typing import Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


def generic_hash(length: int, data: bytes) -> bytes:
    """
    Unkeyed BLAKE2b digest, as libsodium's crypto_generichash.

    Args:
        length: Digest size in bytes (1-64)
        data: Data to hash

    Returns:
        Digest of the requested length

    Raises:
        ValueError: If length is out of range
    """
    if not 1 <= length <= 64:
        raise ValueError(f"generic hash length must be between 1 and 64, got {length}")
    return hashlib.blake2b(bytes(data), digest_size=length).digest()


def pbkdf2_sha512(password: Union[str, bytes], salt: Union[str, bytes], iterations: int, length: int) -> bytes:
    """
    Stretch a password with PBKDF2-HMAC-SHA512.

    Text arguments are UTF-8 encoded.

    Args:
        password: Password or mnemonic
        salt: Salt
        iterations: Iteration count
        length: Output length in bytes

    Returns:
        Derived key bytes
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    if isinstance(salt, str):
        salt = salt.encode("utf-8")

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=length,
        salt=bytes(salt),
        iterations=iterations,
    )
    return kdf.derive(bytes(password))


__all__ = [
    "generic_hash",
    "pbkdf2_sha512",
]
