"""
Key entity and lifecycle.

A Key is built from a credential string (a base58 key encoding, or a
fundraiser mnemonic with email and passphrase). Derivation runs once, off the
event loop, behind the ``ready`` task; every accessor fails with
KeyNotReadyError until that task has completed successfully.

Example:
    key = Key("edskRv6ZnkLQMVustbYHFPNsABu1Js6pEEWyMUFJQTqEZjVCU2WHh8ckcc7YA4uBzPiJjZCsv3pC1NDdV99AnyLzPjSip4uC3y")
    await key.ready
    key.public_key_hash()
"""

from __future__ import annotations
import asyncio
import logging
import secrets
from enum import Enum
from typing import Optional, Union

from ..codec.base58check import b58c_encode
from ..codec.prefixes import PREFIX, prefix_for
from ..config import DEFAULT_KDF, KdfParameters, LedgerOptions
from ..crypto.provider import PrimitiveProvider, get_default_provider
from ..crypto.secp256k1 import generate_secret
from ..curves import Curve
from ..runtime.errors import (
    KeyNotReadyError,
    LedgerSigningRequiredError,
    MissingPassphraseError,
    NoSecretKeyError,
    UnsupportedCurveError,
)
from ..signers.signer import SignedBytes, sign_bytes, verify_bytes
from .initializer import DerivedKey, KeyInitializer

logger = logging.getLogger(__name__)

PUBLIC_KEY_HASH_LENGTH = 20


class KeyState(str, Enum):
    """Lifecycle state of a Key."""
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class Key:
    """
    Creates a key object from a base58 encoded key.

    Args:
        key: A public or secret key in base58 encoding, or a 15 word
            mnemonic when ``email`` is given
        passphrase: Passphrase for an encrypted secret key or fundraiser key
        email: Email used if a fundraiser key is passed
        ledger: Hardware delegation settings
        provider: Primitive provider, defaults to the shared provider
        kdf: Key stretching parameters
    """

    def __init__(
        self,
        key: str,
        passphrase: Optional[str] = None,
        email: Optional[str] = None,
        *,
        ledger: Optional[LedgerOptions] = None,
        provider: Optional[PrimitiveProvider] = None,
        kdf: KdfParameters = DEFAULT_KDF,
    ):
        self._provider = provider or get_default_provider()
        self._kdf = kdf
        self._initializer = KeyInitializer(key, passphrase, email, provider=self._provider, kdf=kdf)
        self._ledger = ledger.model_copy() if ledger is not None else LedgerOptions()

        self._state = KeyState.PENDING
        self._derived: Optional[DerivedKey] = None
        self._error: Optional[BaseException] = None
        self._ready: Optional[asyncio.Task] = None

        # start deriving right away when constructed inside a running loop
        try:
            self._start(asyncio.get_running_loop())
        except RuntimeError:
            pass

    @classmethod
    async def create(cls, key: str, passphrase: Optional[str] = None, email: Optional[str] = None, **kwargs) -> Key:
        """Construct a Key and wait until it is ready."""
        instance = cls(key, passphrase, email, **kwargs)
        return await instance.ready

    @classmethod
    async def generate(cls, curve: Union[Curve, str] = Curve.ED25519, **kwargs) -> Key:
        """
        Create a key from fresh random secret material.

        Raises:
            UnsupportedCurveError: For P-256
        """
        curve = Curve(curve)
        if curve is Curve.ED25519:
            encoded = b58c_encode(secrets.token_bytes(32), PREFIX["edsk2"])
        elif curve is Curve.SECP256K1:
            encoded = b58c_encode(generate_secret(), PREFIX["spsk"])
        else:
            raise UnsupportedCurveError(f"Cannot generate keys for curve '{curve.value}'")
        return await cls.create(encoded, **kwargs)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def ready(self) -> "asyncio.Task[Key]":
        """
        Task completing once derivation finishes.

        The task is started at construction when an event loop is running,
        otherwise on first access. It resolves with the key itself,
        or raises the initialization error. Must be accessed from a running
        event loop.
        """
        if self._ready is None:
            self._start(asyncio.get_running_loop())
        return self._ready

    def _start(self, loop: asyncio.AbstractEventLoop) -> None:
        self._ready = loop.create_task(self._initialize())
        self._ready.add_done_callback(self._on_ready_done)

    def _on_ready_done(self, task: asyncio.Task) -> None:
        # a task cancelled before its first step never enters _initialize
        if task.cancelled() and self._state is KeyState.PENDING:
            self._state = KeyState.FAILED
            self._error = asyncio.CancelledError()
            self._initializer = None

    async def _initialize(self) -> Key:
        loop = asyncio.get_running_loop()
        try:
            derived = await loop.run_in_executor(None, self._initializer.run)
        except BaseException as e:
            # cancellation also settles the key
            self._state = KeyState.FAILED
            self._error = e
            logger.debug("Key initialization failed: %s", type(e).__name__)
            raise
        finally:
            # drop the credential and passphrase
            self._initializer = None

        self._derived = derived
        self._state = KeyState.READY
        logger.debug("Key ready: curve=%s secret=%s", derived.curve.value, derived.is_secret)
        return self

    @property
    def state(self) -> KeyState:
        return self._state

    def _require_ready(self) -> DerivedKey:
        if self._state is KeyState.READY:
            return self._derived
        if self._state is KeyState.FAILED:
            raise KeyNotReadyError("Key initialization failed", cause=self._error)
        raise KeyNotReadyError("Key initialization has not completed")

    # ------------------------------------------------------------------
    # Key material
    # ------------------------------------------------------------------

    @property
    def curve(self) -> Curve:
        return self._require_ready().curve

    @property
    def is_secret(self) -> bool:
        return self._require_ready().is_secret

    @property
    def public_key_bytes(self) -> bytes:
        return self._require_ready().public_key

    @property
    def secret_key_bytes(self) -> Optional[bytes]:
        return self._require_ready().secret_key

    def public_key(self) -> str:
        """
        Returns the public key.

        Returns:
            The public key in base58check encoding
        """
        derived = self._require_ready()
        return b58c_encode(derived.public_key, prefix_for(derived.curve.public_key_tag))

    def secret_key(self) -> str:
        """
        Returns the secret key.

        Ed25519 keys are always exported in their 64-byte form, re-expanded
        from the seed.

        Raises:
            NoSecretKeyError: If the key was built from a public key
        """
        derived = self._require_ready()
        if derived.secret_key is None:
            raise NoSecretKeyError()

        secret = derived.secret_key
        if derived.curve is Curve.ED25519:
            _, secret = self._provider.seed_keypair(secret[:32])

        return b58c_encode(secret, prefix_for(derived.curve.secret_key_tag))

    def public_key_hash(self) -> str:
        """
        Returns the public key hash (tz1/tz2/tz3 address) for this key.
        """
        derived = self._require_ready()
        digest = self._provider.generic_hash(PUBLIC_KEY_HASH_LENGTH, derived.public_key)
        return b58c_encode(digest, prefix_for(derived.curve.public_key_hash_tag))

    def encrypted_secret_key(self, passphrase: str, salt: Optional[bytes] = None) -> str:
        """
        Export the secret key encrypted under a passphrase.

        Ed25519 keys export their 32-byte seed. The result decodes back
        through Key(encoded, passphrase).

        Args:
            passphrase: Encryption passphrase
            salt: 8-byte salt, random when omitted

        Raises:
            NoSecretKeyError: If the key was built from a public key
            MissingPassphraseError: If passphrase is empty
        """
        derived = self._require_ready()
        if derived.secret_key is None:
            raise NoSecretKeyError()
        if not passphrase:
            raise MissingPassphraseError("Cannot encrypt a key without a passphrase")

        if salt is None:
            salt = secrets.token_bytes(self._kdf.salt_length)
        if len(salt) != self._kdf.salt_length:
            raise ValueError(f"Salt must be {self._kdf.salt_length} bytes, got {len(salt)}")

        secret = derived.secret_key
        if derived.curve is Curve.ED25519:
            secret = secret[:32]

        encryption_key = self._provider.pbkdf2_sha512(
            passphrase,
            salt,
            self._kdf.encryption_iterations,
            self._kdf.encryption_key_length,
        )
        ciphertext = self._provider.seal_easy(secret, self._kdf.zero_nonce, encryption_key)
        return b58c_encode(bytes(salt) + ciphertext, prefix_for(derived.curve.encrypted_secret_key_tag))

    # ------------------------------------------------------------------
    # Ledger delegation
    # ------------------------------------------------------------------

    @property
    def ledger(self) -> LedgerOptions:
        return self._ledger

    @property
    def is_ledger(self) -> bool:
        return self._ledger.is_ledger

    @is_ledger.setter
    def is_ledger(self, value: bool) -> None:
        self._ledger.is_ledger = value

    @property
    def ledger_path(self) -> str:
        return self._ledger.ledger_path

    @ledger_path.setter
    def ledger_path(self, value: str) -> None:
        self._ledger.ledger_path = value

    @property
    def ledger_curve(self) -> int:
        return self._ledger.ledger_curve

    @ledger_curve.setter
    def ledger_curve(self, value: int) -> None:
        self._ledger.ledger_curve = value

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign(self, message: str, watermark: Optional[bytes] = None) -> SignedBytes:
        """
        Sign a raw sequence of bytes.

        Args:
            message: Sequence of bytes in hexadecimal notation
            watermark: The watermark bytes

        Raises:
            LedgerSigningRequiredError: If the key delegates to a ledger
        """
        derived = self._require_ready()
        if self._ledger.is_ledger:
            raise LedgerSigningRequiredError(details={"path": self._ledger.ledger_path})
        return sign_bytes(derived.curve, derived.secret_key, message, watermark, self._provider)

    def verify(self, message: str, signature: str, watermark: Optional[bytes] = None) -> bool:
        """
        Verify a signature.

        Args:
            message: Sequence of bytes in hexadecimal notation
            signature: A signature in base58 encoding
            watermark: The watermark bytes used when signing
        """
        derived = self._require_ready()
        return verify_bytes(derived.curve, derived.public_key, message, signature, watermark, self._provider)

    def __repr__(self) -> str:
        if self._state is not KeyState.READY:
            return f"Key(state={self._state.value})"
        return f"Key(curve={self.curve.value}, pkh={self.public_key_hash()}, secret={self.is_secret})"


__all__ = [
    "Key",
    "KeyState",
]
