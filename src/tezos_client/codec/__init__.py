"""
Tezos Codec Module

Encodings shared by keys and signers.

Key components:
- prefixes.py: base58check prefix table and watermarks
- base58check.py: prefixed base58check encode/decode
- buffers.py: hex conversion and buffer concatenation
"""

from .base58check import b58c_decode, b58c_encode
from .buffers import bytes_to_hex, hex_to_bytes, merge_bytes
from .prefixes import PREFIX, WATERMARK, prefix_for

__all__ = [
    "PREFIX",
    "WATERMARK",
    "prefix_for",
    "b58c_encode",
    "b58c_decode",
    "hex_to_bytes",
    "bytes_to_hex",
    "merge_bytes",
]
