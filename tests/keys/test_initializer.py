"""
Initializer state machine tests.
"""

import hashlib

import base58
import nacl.bindings
import nacl.secret
import pytest

from tezos_client.codec import PREFIX, b58c_encode
from tezos_client.config import DEFAULT_KDF
from tezos_client.crypto import seed_keypair
from tezos_client.curves import Curve
from tezos_client.keys.initializer import DerivedKey, InitState, KeyInitializer, derive_key
from tezos_client.runtime.errors import (
    DecodeError,
    DecryptionFailedError,
    InvalidCurvePrefixError,
    InvalidKeyError,
    InvalidKeyLengthError,
    InvalidKeyTagError,
    MissingPassphraseError,
    UnsupportedCurveError,
)

from conftest import FUNDRAISER_EMAIL, FUNDRAISER_MNEMONIC, FUNDRAISER_PASSPHRASE, TEST_SECRET_KEY


def encrypt_secret(secret: bytes, passphrase: str, tag: str, salt: bytes = b"\x07" * 8) -> str:
    """Build an encrypted key encoding with hashlib and libsodium directly."""
    encryption_key = hashlib.pbkdf2_hmac("sha512", passphrase.encode("utf-8"), salt, 32768, 32)
    ciphertext = nacl.secret.SecretBox(encryption_key).encrypt(secret, bytes(24)).ciphertext
    return base58.b58encode_check(PREFIX[tag] + salt + ciphertext).decode("ascii")


class TestStateMachine:
    """State transitions."""

    def test_success_ends_ready(self, ed_seed_key):
        initializer = KeyInitializer(ed_seed_key)
        assert initializer.state is InitState.START
        initializer.run()
        assert initializer.state is InitState.READY

    def test_failure_ends_failed(self):
        initializer = KeyInitializer("xx" + "a" * 52)
        with pytest.raises(InvalidCurvePrefixError):
            initializer.run()
        assert initializer.state is InitState.FAILED

    def test_runs_once(self, ed_seed_key):
        initializer = KeyInitializer(ed_seed_key)
        initializer.run()
        with pytest.raises(RuntimeError):
            initializer.run()

    def test_non_string_key_rejected(self):
        with pytest.raises(TypeError):
            KeyInitializer(b"edsk")


class TestEncodedPath:
    """Prefixed base58 credentials."""

    def test_known_secret_key(self):
        derived = derive_key(TEST_SECRET_KEY)
        assert derived.curve is Curve.ED25519
        assert derived.is_secret is True
        assert len(derived.secret_key) == 64
        assert derived.public_key == derived.secret_key[32:]

    def test_seed_secret_key_is_expanded(self, ed_seed, ed_seed_key):
        derived = derive_key(ed_seed_key)
        public_key, secret_key = seed_keypair(ed_seed)
        assert derived.public_key == public_key
        assert derived.secret_key == secret_key
        assert len(derived.secret_key) == 64

    def test_public_key(self, ed_seed):
        public_key, _ = seed_keypair(ed_seed)
        derived = derive_key(b58c_encode(public_key, PREFIX["edpk"]))
        assert derived.is_secret is False
        assert derived.secret_key is None
        assert derived.public_key == public_key

    def test_secp256k1_secret_key(self, sp_secret, sp_secret_key):
        derived = derive_key(sp_secret_key)
        assert derived.curve is Curve.SECP256K1
        assert derived.secret_key == sp_secret
        assert len(derived.public_key) == 33

    def test_secp256k1_public_key(self, sp_secret_key):
        public_key = derive_key(sp_secret_key).public_key
        encoded = b58c_encode(public_key, PREFIX["sppk"])
        assert len(encoded) == 55
        derived = derive_key(encoded)
        assert derived.curve is Curve.SECP256K1
        assert derived.public_key == public_key

    @pytest.mark.parametrize("key", [
        "tz1VSUr8wwNhLAzempoch5d6hLRiTh8Cjcjb",
        "xxskRv6ZnkLQMVustbYHFPNsABu1Js6pEEWyMUFJQTqEZjVCU2WHh8c",
        "",
        "e",
    ])
    def test_invalid_curve_prefix(self, key):
        with pytest.raises(InvalidCurvePrefixError):
            derive_key(key)

    @pytest.mark.parametrize("length", [4, 10, 53, 56, 87, 89, 97, 99])
    def test_invalid_length(self, length):
        key = "edsk" + "a" * (length - 4)
        with pytest.raises(InvalidKeyLengthError):
            derive_key(key)

    def test_invalid_tag(self):
        with pytest.raises(InvalidKeyTagError):
            derive_key("edxx" + "a" * 50)

    def test_encrypted_public_key_tag_rejected(self):
        with pytest.raises(InvalidKeyTagError):
            derive_key("edepk" + "a" * 49)

    def test_corrupted_checksum(self):
        last = "2" if TEST_SECRET_KEY[-1] != "2" else "3"
        with pytest.raises(DecodeError):
            derive_key(TEST_SECRET_KEY[:-1] + last)

    def test_wrong_prefix_for_tag(self, ed_seed):
        # right length and tag, but encoded with the public key prefix
        encoded = b58c_encode(ed_seed, PREFIX["edpk"])
        with pytest.raises(DecodeError):
            derive_key("edsk" + encoded[4:])

    @pytest.mark.parametrize("tag", ["p2pk", "p2sk"])
    def test_p256_always_unsupported(self, tag):
        encoded = b58c_encode(bytes([2]) + bytes(32), PREFIX[tag])
        with pytest.raises(UnsupportedCurveError):
            derive_key(encoded)

    def test_p256_unsupported_regardless_of_length(self):
        with pytest.raises(UnsupportedCurveError):
            derive_key("p2sk")


class TestEncryptedKeys:
    """Passphrase-encrypted secret keys."""

    def test_encrypted_ed25519_seed(self, ed_seed):
        encoded = encrypt_secret(ed_seed, "correct horse", "edesk")
        assert len(encoded) == 88
        derived = derive_key(encoded, "correct horse")
        public_key, secret_key = nacl.bindings.crypto_sign_seed_keypair(ed_seed)
        assert derived.curve is Curve.ED25519
        assert derived.public_key == public_key
        assert derived.secret_key == secret_key

    def test_encrypted_secp256k1(self, sp_secret):
        encoded = encrypt_secret(sp_secret, "correct horse", "spesk")
        assert len(encoded) == 88
        derived = derive_key(encoded, "correct horse")
        assert derived.curve is Curve.SECP256K1
        assert derived.secret_key == sp_secret

    def test_wrong_passphrase(self, ed_seed):
        encoded = encrypt_secret(ed_seed, "correct horse", "edesk")
        initializer = KeyInitializer(encoded, "battery staple")
        with pytest.raises(DecryptionFailedError) as exc_info:
            initializer.run()
        assert "passphrase" not in exc_info.value.message.lower()
        assert initializer.state is InitState.FAILED

    def test_missing_passphrase(self, ed_seed):
        encoded = encrypt_secret(ed_seed, "correct horse", "edesk")
        with pytest.raises(MissingPassphraseError):
            derive_key(encoded)

    def test_ready_after_decryption(self, ed_seed):
        encoded = encrypt_secret(ed_seed, "pw", "edesk")
        initializer = KeyInitializer(encoded, "pw")
        initializer.run()
        assert initializer.state is InitState.READY


class TestFundraiserPath:
    """Mnemonic + email + passphrase derivation."""

    def test_deterministic(self):
        first = derive_key(FUNDRAISER_MNEMONIC, FUNDRAISER_PASSPHRASE, FUNDRAISER_EMAIL)
        second = derive_key(FUNDRAISER_MNEMONIC, FUNDRAISER_PASSPHRASE, FUNDRAISER_EMAIL)
        assert first.public_key == second.public_key
        assert first.secret_key == second.secret_key
        assert first.curve is Curve.ED25519
        assert first.is_secret is True

    def test_matches_manual_derivation(self):
        salt = f"mnemonic{FUNDRAISER_EMAIL}{FUNDRAISER_PASSPHRASE}".encode("utf-8")
        seed = hashlib.pbkdf2_hmac("sha512", FUNDRAISER_MNEMONIC.encode("utf-8"), salt, 2048, 64)[:32]
        public_key, secret_key = nacl.bindings.crypto_sign_seed_keypair(seed)
        derived = derive_key(FUNDRAISER_MNEMONIC, FUNDRAISER_PASSPHRASE, FUNDRAISER_EMAIL)
        assert derived.public_key == public_key
        assert derived.secret_key == secret_key

    def test_known_address(self):
        derived = derive_key(FUNDRAISER_MNEMONIC, FUNDRAISER_PASSPHRASE, FUNDRAISER_EMAIL)
        digest = hashlib.blake2b(derived.public_key, digest_size=20).digest()
        assert base58.b58encode_check(PREFIX["tz1"] + digest).decode("ascii") == (
            "tz1RPqFgbx2vsyv3F3bmdX48qCqJo2poKxuo"
        )

    def test_salt_is_nfkd_normalized(self):
        composed = derive_key(FUNDRAISER_MNEMONIC, "caf\u00e9", FUNDRAISER_EMAIL)
        decomposed = derive_key(FUNDRAISER_MNEMONIC, "cafe\u0301", FUNDRAISER_EMAIL)
        assert composed.public_key == decomposed.public_key

    def test_different_passphrase_different_key(self):
        first = derive_key(FUNDRAISER_MNEMONIC, FUNDRAISER_PASSPHRASE, FUNDRAISER_EMAIL)
        second = derive_key(FUNDRAISER_MNEMONIC, FUNDRAISER_PASSPHRASE + "x", FUNDRAISER_EMAIL)
        assert first.public_key != second.public_key

    @pytest.mark.parametrize("passphrase", [None, ""])
    def test_missing_passphrase(self, passphrase):
        with pytest.raises(MissingPassphraseError):
            derive_key(FUNDRAISER_MNEMONIC, passphrase, FUNDRAISER_EMAIL)


class TestDerivedKey:
    """DerivedKey invariants."""

    def test_public_only_cannot_hold_secret(self):
        with pytest.raises(InvalidKeyError):
            DerivedKey(Curve.ED25519, bytes(32), bytes(64), is_secret=False)

    def test_kdf_defaults(self):
        assert DEFAULT_KDF.fundraiser_iterations == 2048
        assert DEFAULT_KDF.encryption_iterations == 32768
        assert DEFAULT_KDF.zero_nonce == bytes(24)
