"""
Cryptographic primitives for Tezos keys.

Provides Ed25519, secp256k1 public key derivation, BLAKE2b, PBKDF2 and
secretbox behind the PrimitiveProvider interface.
"""

from .ed25519 import Ed25519PrivateKey, Ed25519PublicKey, seed_keypair, sign_detached, verify_detached
from .hash_utils import generic_hash, pbkdf2_sha512
from .provider import DefaultPrimitiveProvider, PrimitiveProvider, get_default_provider
from .secp256k1 import public_key_from_secret
from .secretbox import open_easy, seal_easy

__all__ = [
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "seed_keypair",
    "sign_detached",
    "verify_detached",
    "generic_hash",
    "pbkdf2_sha512",
    "public_key_from_secret",
    "open_easy",
    "seal_easy",
    "PrimitiveProvider",
    "DefaultPrimitiveProvider",
    "get_default_provider",
]
