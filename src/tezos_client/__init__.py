"""
Tezos Python client - key core

Parses, decrypts and derives Tezos keys (ed25519, secp256k1; P-256 is
recognised but unsupported) and signs/verifies byte sequences with them.
"""

from .codec import PREFIX, WATERMARK, b58c_decode, b58c_encode, bytes_to_hex, hex_to_bytes, merge_bytes
from .config import DEFAULT_KDF, KdfParameters, LedgerOptions
from .crypto import DefaultPrimitiveProvider, PrimitiveProvider, get_default_provider
from .curves import Curve
from .keys import DerivedKey, InitState, Key, KeyInitializer, KeyState, derive_key
from .runtime.errors import *
from .runtime.errors import __all__ as _error_names
from .signers import LedgerTransport, SignedBytes, ledger_sign

__version__ = "0.4.6"
__all__ = [
    # Keys
    "Key",
    "KeyState",
    "KeyInitializer",
    "InitState",
    "DerivedKey",
    "derive_key",
    "Curve",

    # Signing
    "SignedBytes",
    "LedgerTransport",
    "ledger_sign",

    # Codec
    "PREFIX",
    "WATERMARK",
    "b58c_encode",
    "b58c_decode",
    "hex_to_bytes",
    "bytes_to_hex",
    "merge_bytes",

    # Configuration and primitives
    "KdfParameters",
    "DEFAULT_KDF",
    "LedgerOptions",
    "PrimitiveProvider",
    "DefaultPrimitiveProvider",
    "get_default_provider",
] + list(_error_names)
