"""
Authenticated symmetric encryption (XSalsa20-Poly1305) for encrypted keys.
"""

import nacl.exceptions
import nacl.secret

from ..runtime.errors import DecryptionFailedError

NONCE_LENGTH = nacl.secret.SecretBox.NONCE_SIZE
KEY_LENGTH = nacl.secret.SecretBox.KEY_SIZE


def open_easy(ciphertext: bytes, nonce: bytes, key: bytes) -> bytes:
    """
    Open a secretbox ciphertext (MAC followed by encrypted data).

    Raises:
        DecryptionFailedError: On any authentication or parameter failure.
            The message does not reveal which.
    """
    try:
        return nacl.secret.SecretBox(bytes(key)).decrypt(bytes(ciphertext), bytes(nonce))
    except (nacl.exceptions.CryptoError, ValueError, TypeError) as e:
        raise DecryptionFailedError(cause=e) from e


def seal_easy(plaintext: bytes, nonce: bytes, key: bytes) -> bytes:
    """Encrypt plaintext, returning MAC followed by encrypted data."""
    return nacl.secret.SecretBox(bytes(key)).encrypt(bytes(plaintext), bytes(nonce)).ciphertext


__all__ = [
    "open_easy",
    "seal_easy",
    "NONCE_LENGTH",
    "KEY_LENGTH",
]
