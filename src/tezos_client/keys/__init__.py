"""
Key management for Tezos accounts.

Provides the Key entity and the initializer that derives its material.
"""

from .initializer import DerivedKey, InitState, KeyInitializer, derive_key
from .key import Key, KeyState

__all__ = [
    "Key",
    "KeyState",
    "KeyInitializer",
    "InitState",
    "DerivedKey",
    "derive_key",
]
