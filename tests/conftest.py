"""
Shared fixtures for the key core tests.
"""

import pytest
import pytest_asyncio

from tezos_client.codec import PREFIX, b58c_encode
from tezos_client.keys import Key

# Ed25519 secret key in 64-byte form
TEST_SECRET_KEY = (
    "edskRv6ZnkLQMVustbYHFPNsABu1Js6pEEWyMUFJQTqEZjVCU2WHh8ckcc7YA4uBzPiJjZCsv3pC1NDdV99AnyLzPjSip4uC3y"
)

FUNDRAISER_MNEMONIC = (
    "raw peace visual boil prefer rebel anchor right elegant side gossip enroll force salmon between"
)
FUNDRAISER_EMAIL = "pqbqfxds.qlvulcgb@tezos.example.org"
FUNDRAISER_PASSPHRASE = "y4BX7qS1UE"


@pytest.fixture
def ed_seed() -> bytes:
    """Deterministic 32-byte Ed25519 seed."""
    return bytes(range(32))


@pytest.fixture
def ed_seed_key(ed_seed) -> str:
    """54-character edsk encoding of the seed."""
    return b58c_encode(ed_seed, PREFIX["edsk2"])


@pytest.fixture
def sp_secret() -> bytes:
    """Valid secp256k1 scalar."""
    return bytes([1]) * 32


@pytest.fixture
def sp_secret_key(sp_secret) -> str:
    return b58c_encode(sp_secret, PREFIX["spsk"])


@pytest_asyncio.fixture
async def ed_key() -> Key:
    """Ready Ed25519 key built from the known test vector."""
    return await Key.create(TEST_SECRET_KEY)


@pytest_asyncio.fixture
async def ed_public_key(ed_key) -> Key:
    """Ready public-key-only Ed25519 key."""
    return await Key.create(ed_key.public_key())
