"""
Key core configuration.

KdfParameters carries the key-stretching constants fixed by the Tezos key
formats. LedgerOptions describes hardware delegation for a Key.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

DEFAULT_LEDGER_PATH = "44'/1729'/0'/0'"
DEFAULT_LEDGER_CURVE = 0x00

_LEDGER_PATH_RE = re.compile(r"^\d+'?(/\d+'?)*$")


@dataclass(frozen=True)
class KdfParameters:
    """Key-stretching parameters for fundraiser and encrypted keys."""
    fundraiser_iterations: int = 2048
    fundraiser_length: int = 64
    encryption_iterations: int = 32768
    encryption_key_length: int = 32
    salt_length: int = 8
    nonce_length: int = 24

    @property
    def zero_nonce(self) -> bytes:
        return bytes(self.nonce_length)


DEFAULT_KDF = KdfParameters()


class LedgerOptions(BaseModel):
    """
    Hardware wallet delegation settings.

    ledger_curve follows the device's curve selector: 0x00 ed25519,
    0x01 secp256k1, 0x02 secp256r1.
    """
    is_ledger: bool = Field(default=False, alias="isLedger", description="Sign through a hardware transport")
    ledger_path: str = Field(default=DEFAULT_LEDGER_PATH, alias="ledgerPath", description="BIP32 derivation path")
    ledger_curve: int = Field(default=DEFAULT_LEDGER_CURVE, alias="ledgerCurve", ge=0, le=3,
                              description="Device curve selector")

    model_config = {"populate_by_name": True, "validate_assignment": True}

    @field_validator("ledger_path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        if not _LEDGER_PATH_RE.match(value):
            raise ValueError(f"Invalid ledger derivation path: {value!r}")
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to camelCase dictionary."""
        return {
            "isLedger": self.is_ledger,
            "ledgerPath": self.ledger_path,
            "ledgerCurve": self.ledger_curve,
        }


__all__ = [
    "DEFAULT_LEDGER_PATH",
    "DEFAULT_LEDGER_CURVE",
    "KdfParameters",
    "DEFAULT_KDF",
    "LedgerOptions",
]
