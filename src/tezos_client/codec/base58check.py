"""
Base58check encoding with Tezos prefixes.

A payload is prefixed with its tag bytes, suffixed with the first four bytes
of a double SHA-256 and base58 encoded with the Bitcoin alphabet.
"""

import logging

import base58

from ..runtime.errors import DecodeError

logger = logging.getLogger(__name__)


def b58c_encode(payload: bytes, prefix: bytes) -> str:
    """
    Encode a payload with a prefix and checksum.

    Args:
        payload: Raw bytes
        prefix: Tag bytes from the prefix table

    Returns:
        Base58check text
    """
    return base58.b58encode_check(bytes(prefix) + bytes(payload)).decode("ascii")


def b58c_decode(encoded: str, prefix: bytes) -> bytes:
    """
    Decode base58check text and strip its prefix.

    Args:
        encoded: Base58check text
        prefix: Expected tag bytes

    Returns:
        Payload without prefix and checksum

    Raises:
        DecodeError: If the text is not base58, the checksum is wrong or the
            prefix does not match
    """
    try:
        decoded = base58.b58decode_check(encoded)
    except ValueError as e:
        raise DecodeError(f"Invalid base58check encoding: {e}", cause=e) from e

    if not decoded.startswith(prefix):
        logger.debug("Prefix mismatch decoding %s...", encoded[:5])
        raise DecodeError(
            "Encoded value does not carry the expected prefix",
            details={"expected": bytes(prefix).hex(), "actual": decoded[:len(prefix)].hex()},
        )

    return decoded[len(prefix):]


__all__ = [
    "b58c_encode",
    "b58c_decode",
]
