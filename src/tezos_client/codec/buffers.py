"""
Byte buffer helpers.

Hex conversion and concatenation used when preparing payloads for hashing
and signing.
"""

import re
from typing import Union

from ..runtime.errors import DecodeError, ErrorCode

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")


def hex_to_bytes(hex_string: str) -> bytes:
    """
    Convert a hex string to bytes.

    Args:
        hex_string: Even-length hex text, upper or lower case

    Returns:
        Decoded bytes

    Raises:
        DecodeError: If the text is not valid hex
    """
    if not isinstance(hex_string, str) or not _HEX_RE.fullmatch(hex_string):
        raise DecodeError(
            "Invalid hex string: expected an even number of hex digits",
            ErrorCode.INVALID_HEX,
            details={"value": repr(hex_string)[:32]},
        )

    return bytes.fromhex(hex_string)


def bytes_to_hex(data: Union[bytes, bytearray]) -> str:
    """Convert bytes to lower-case hex."""
    return bytes(data).hex()


def merge_bytes(first: bytes, second: bytes) -> bytes:
    """Concatenate two buffers, e.g. a watermark and a payload."""
    return bytes(first) + bytes(second)


__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "merge_bytes",
]
