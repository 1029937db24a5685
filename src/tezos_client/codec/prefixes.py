"""
Base58check prefix table and operation watermarks.

Prefix values are fixed by the Tezos network encoding rules. The table is
process-wide and read-only.
"""

from types import MappingProxyType
from typing import Mapping

from ..runtime.errors import InvalidKeyTagError

_PREFIX = {
    # Public key hashes
    "tz1": bytes([6, 161, 159]),
    "tz2": bytes([6, 161, 161]),
    "tz3": bytes([6, 161, 164]),
    "KT": bytes([2, 90, 121]),

    # Public keys
    "edpk": bytes([13, 15, 37, 217]),
    "sppk": bytes([3, 254, 226, 86]),
    "p2pk": bytes([3, 178, 139, 127]),

    # Secret keys (edsk is the 64-byte form, edsk2 the 32-byte seed form)
    "edsk": bytes([43, 246, 78, 7]),
    "edsk2": bytes([13, 15, 58, 7]),
    "spsk": bytes([17, 162, 224, 201]),
    "p2sk": bytes([16, 81, 238, 189]),

    # Encrypted secret keys
    "edesk": bytes([7, 90, 60, 179, 41]),
    "spesk": bytes([9, 237, 241, 174, 150]),
    "p2esk": bytes([9, 48, 57, 115, 171]),

    # Signatures
    "edsig": bytes([9, 245, 205, 134, 18]),
    "spsig": bytes([13, 115, 101, 19, 63]),
    "p2sig": bytes([54, 240, 44, 52]),
    "sig": bytes([4, 130, 43]),

    # Chain objects
    "Net": bytes([87, 82, 0]),
    "nce": bytes([69, 220, 169]),
    "B": bytes([1, 52]),
    "o": bytes([5, 116]),
    "Lo": bytes([133, 233]),
    "LLo": bytes([29, 159, 109]),
    "P": bytes([2, 170]),
    "Co": bytes([79, 179]),
    "id": bytes([153, 103]),
    "expr": bytes([13, 44, 64, 27]),
}

PREFIX: Mapping[str, bytes] = MappingProxyType(_PREFIX)

# Leading bytes that separate signed payload categories
_WATERMARK = {
    "block": bytes([1]),
    "endorsement": bytes([2]),
    "generic": bytes([3]),
}

WATERMARK: Mapping[str, bytes] = MappingProxyType(_WATERMARK)


def prefix_for(tag: str) -> bytes:
    """
    Look up the binary prefix for an encoding tag.

    Args:
        tag: Encoding tag such as ``edpk`` or ``tz1``

    Returns:
        Prefix bytes

    Raises:
        InvalidKeyTagError: If the tag is unknown
    """
    try:
        return PREFIX[tag]
    except KeyError:
        raise InvalidKeyTagError(f"Unknown encoding tag: {tag}", details={"tag": tag})


__all__ = [
    "PREFIX",
    "WATERMARK",
    "prefix_for",
]
