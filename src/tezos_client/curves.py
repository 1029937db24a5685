"""
Signature curves supported by Tezos keys.

Each curve knows the tags it uses in the prefix table.
"""

from __future__ import annotations
from enum import Enum


class Curve(str, Enum):
    """Two-letter curve tag."""
    ED25519 = "ed"
    SECP256K1 = "sp"
    P256 = "p2"

    @classmethod
    def from_tag(cls, tag: str) -> "Curve":
        return cls(tag)

    @property
    def public_key_tag(self) -> str:
        return f"{self.value}pk"

    @property
    def secret_key_tag(self) -> str:
        return f"{self.value}sk"

    @property
    def encrypted_secret_key_tag(self) -> str:
        return f"{self.value}esk"

    @property
    def signature_tag(self) -> str:
        return f"{self.value}sig"

    @property
    def public_key_hash_tag(self) -> str:
        return _HASH_TAGS[self]

    def __str__(self) -> str:
        return self.value


_HASH_TAGS = {
    Curve.ED25519: "tz1",
    Curve.SECP256K1: "tz2",
    Curve.P256: "tz3",
}

CURVE_TAGS = frozenset(curve.value for curve in Curve)


__all__ = [
    "Curve",
    "CURVE_TAGS",
]
