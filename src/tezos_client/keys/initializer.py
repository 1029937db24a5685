"""
Key initialization state machine.

Classifies a credential string, decodes and decrypts it, and derives the key
pair. The outcome is a DerivedKey value; any failure raises the matching
TezosError and leaves the initializer in the FAILED state.

    START -> FUNDRAISER ----------------------> DERIVED -> READY
    START -> ENCODED -> (DECRYPTED) ----------> DERIVED -> READY
    any   -> FAILED
"""

from __future__ import annotations
import logging
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..codec.base58check import b58c_decode
from ..codec.prefixes import prefix_for
from ..config import DEFAULT_KDF, KdfParameters
from ..crypto.provider import PrimitiveProvider, get_default_provider
from ..curves import CURVE_TAGS, Curve
from ..runtime.errors import (
    InvalidCurvePrefixError,
    InvalidKeyError,
    InvalidKeyLengthError,
    InvalidKeyTagError,
    MissingPassphraseError,
    UnsupportedCurveError,
)

logger = logging.getLogger(__name__)

VALID_KEY_LENGTHS = frozenset({54, 55, 88, 98})
# 54-character edsk strings carry a bare 32-byte seed
ED_SEED_KEY_LENGTH = 54


class InitState(str, Enum):
    """Initializer states."""
    START = "start"
    FUNDRAISER = "fundraiser"
    ENCODED = "encoded"
    DECRYPTED = "decrypted"
    DERIVED = "derived"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class DerivedKey:
    """Outcome of a successful initialization."""
    curve: Curve
    public_key: bytes
    secret_key: Optional[bytes]
    is_secret: bool

    def __post_init__(self):
        if not self.is_secret and self.secret_key is not None:
            raise InvalidKeyError("Public key credential cannot carry a secret key")

    def __repr__(self) -> str:
        return f"DerivedKey(curve={self.curve.value}, public_key={self.public_key.hex()}, is_secret={self.is_secret})"


class KeyInitializer:
    """
    One-shot parser/deriver for a credential string.

    Args:
        key: Base58 key encoding, or a 15 word mnemonic when email is given
        passphrase: Passphrase for encrypted or fundraiser keys
        email: Fundraiser email; selects mnemonic derivation
        provider: Primitive provider, defaults to the shared provider
        kdf: Key stretching parameters
    """

    def __init__(
        self,
        key: str,
        passphrase: Optional[str] = None,
        email: Optional[str] = None,
        provider: Optional[PrimitiveProvider] = None,
        kdf: KdfParameters = DEFAULT_KDF,
    ):
        if not isinstance(key, str):
            raise TypeError(f"key must be a string, got {type(key).__name__}")

        self._key = key
        self._passphrase = passphrase
        self._email = email
        self._provider = provider or get_default_provider()
        self._kdf = kdf
        self.state = InitState.START

    def run(self) -> DerivedKey:
        """
        Run the state machine to completion.

        Returns:
            The derived key material

        Raises:
            TezosError: The error kind matching the failed step
            RuntimeError: If called more than once
        """
        if self.state is not InitState.START:
            raise RuntimeError(f"Initializer already ran (state={self.state.value})")

        try:
            if self._email:
                derived = self._run_fundraiser()
            else:
                derived = self._run_encoded()
        except Exception:
            self._transition(InitState.FAILED)
            raise

        self._transition(InitState.READY)
        return derived

    def _transition(self, state: InitState) -> None:
        logger.debug("Key initializer %s -> %s", self.state.value, state.value)
        self.state = state

    def _run_fundraiser(self) -> DerivedKey:
        self._transition(InitState.FUNDRAISER)

        if not self._passphrase:
            raise MissingPassphraseError("Fundraiser key provided without a passphrase")

        salt = unicodedata.normalize("NFKD", f"{self._email}{self._passphrase}")
        stretched = self._provider.pbkdf2_sha512(
            self._key,
            f"mnemonic{salt}",
            self._kdf.fundraiser_iterations,
            self._kdf.fundraiser_length,
        )
        public_key, secret_key = self._provider.seed_keypair(stretched[:32])

        self._transition(InitState.DERIVED)
        return DerivedKey(Curve.ED25519, public_key, secret_key, is_secret=True)

    def _run_encoded(self) -> DerivedKey:
        self._transition(InitState.ENCODED)
        key = self._key

        curve_tag = key[:2]
        if curve_tag not in CURVE_TAGS:
            raise InvalidCurvePrefixError(details={"prefix": curve_tag})
        curve = Curve.from_tag(curve_tag)

        if curve is Curve.P256:
            raise UnsupportedCurveError("Curve P256 key is not yet supported")

        if len(key) not in VALID_KEY_LENGTHS:
            raise InvalidKeyLengthError(details={"length": len(key)})

        encrypted = key[2:3] == "e"
        kind = key[3:5] if encrypted else key[2:4]
        if kind not in ("pk", "sk"):
            raise InvalidKeyTagError(details={"tag": kind})
        is_secret = kind == "sk"

        tag = f"{curve.value}{'e' if encrypted else ''}{kind}"
        if tag == "edsk" and len(key) == ED_SEED_KEY_LENGTH:
            tag = "edsk2"
        decoded = b58c_decode(key, prefix_for(tag))

        if encrypted:
            decoded = self._decrypt(decoded)

        if not is_secret:
            self._transition(InitState.DERIVED)
            return DerivedKey(curve, decoded, None, is_secret=False)

        public_key, secret_key = self._derive_public_key(curve, decoded)
        self._transition(InitState.DERIVED)
        return DerivedKey(curve, public_key, secret_key, is_secret=True)

    def _decrypt(self, payload: bytes) -> bytes:
        if not self._passphrase:
            raise MissingPassphraseError("Encrypted key provided without a passphrase")

        salt = payload[:self._kdf.salt_length]
        ciphertext = payload[self._kdf.salt_length:]
        encryption_key = self._provider.pbkdf2_sha512(
            self._passphrase,
            salt,
            self._kdf.encryption_iterations,
            self._kdf.encryption_key_length,
        )
        plaintext = self._provider.open_easy(ciphertext, self._kdf.zero_nonce, encryption_key)

        self._transition(InitState.DECRYPTED)
        return plaintext

    def _derive_public_key(self, curve: Curve, secret_key: bytes):
        if curve is Curve.ED25519:
            if len(secret_key) == 64:
                return secret_key[32:], secret_key
            if len(secret_key) == 32:
                return self._provider.seed_keypair(secret_key)
            raise InvalidKeyError(f"Ed25519 secret key must be 32 or 64 bytes, got {len(secret_key)}")
        elif curve is Curve.SECP256K1:
            return self._provider.secp256k1_public_key(secret_key), secret_key
        elif curve is Curve.P256:
            raise UnsupportedCurveError("Curve P256 key is not yet supported")
        raise InvalidKeyError()


def derive_key(
    key: str,
    passphrase: Optional[str] = None,
    email: Optional[str] = None,
    provider: Optional[PrimitiveProvider] = None,
    kdf: KdfParameters = DEFAULT_KDF,
) -> DerivedKey:
    """Run a fresh initializer over a credential and return its outcome."""
    return KeyInitializer(key, passphrase, email, provider=provider, kdf=kdf).run()


__all__ = [
    "InitState",
    "DerivedKey",
    "KeyInitializer",
    "derive_key",
    "VALID_KEY_LENGTHS",
]
