"""
Signing infrastructure for Tezos keys.

Provides local Ed25519 signing/verification and hardware delegation.
"""

from .ledger import LedgerTransport, ledger_sign
from .signer import SignedBytes, decode_signature, sign_bytes, verify_bytes

__all__ = [
    "SignedBytes",
    "sign_bytes",
    "verify_bytes",
    "decode_signature",
    "LedgerTransport",
    "ledger_sign",
]
