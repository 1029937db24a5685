"""
Ledger delegation tests using an in-memory transport.
"""

import pytest

from tezos_client.codec import PREFIX, WATERMARK, b58c_decode
from tezos_client.crypto import generic_hash, sign_detached
from tezos_client.runtime.errors import LedgerError, TezosError
from tezos_client.signers import LedgerTransport, ledger_sign

OPERATION = "03" + "cd" * 16


class RecordingTransport(LedgerTransport):
    """Signs with a local secret key and records each request."""

    def __init__(self, secret_key: bytes):
        self.secret_key = secret_key
        self.requests = []

    async def sign(self, path, curve, payload):
        self.requests.append((path, curve, payload))
        return sign_detached(generic_hash(32, payload), self.secret_key)


class FailingTransport(LedgerTransport):
    def __init__(self, error: Exception):
        self.error = error

    async def sign(self, path, curve, payload):
        raise self.error


class ShortSignatureTransport(LedgerTransport):
    async def sign(self, path, curve, payload):
        return b"\x00" * 63


class TestLedgerSign:
    """ledger_sign behaviour."""

    @pytest.mark.asyncio
    async def test_signs_through_transport(self, ed_key):
        ed_key.is_ledger = True
        ed_key.ledger_path = "44'/1729'/3'/0'"
        transport = RecordingTransport(ed_key.secret_key_bytes)

        signed = await ledger_sign(ed_key, transport, OPERATION, WATERMARK["generic"])

        assert transport.requests == [
            ("44'/1729'/3'/0'", 0, WATERMARK["generic"] + bytes.fromhex(OPERATION)),
        ]
        assert signed.bytes == OPERATION
        assert signed.edsig.startswith("edsig")
        raw = b58c_decode(signed.edsig, PREFIX["edsig"])
        assert signed.sbytes == OPERATION + raw.hex()

    @pytest.mark.asyncio
    async def test_device_signature_verifies_locally(self, ed_key):
        ed_key.is_ledger = True
        signed = await ledger_sign(ed_key, RecordingTransport(ed_key.secret_key_bytes), OPERATION)
        assert ed_key.verify(OPERATION, signed.edsig) is True

    @pytest.mark.asyncio
    async def test_requires_ledger_key(self, ed_key):
        with pytest.raises(LedgerError):
            await ledger_sign(ed_key, RecordingTransport(ed_key.secret_key_bytes), OPERATION)

    @pytest.mark.asyncio
    async def test_transport_failure_is_wrapped(self, ed_key):
        ed_key.is_ledger = True
        error = ConnectionError("device unplugged")
        with pytest.raises(LedgerError) as exc_info:
            await ledger_sign(ed_key, FailingTransport(error), OPERATION)
        assert exc_info.value.cause is error

    @pytest.mark.asyncio
    async def test_tezos_errors_pass_through(self, ed_key):
        ed_key.is_ledger = True
        error = TezosError("rejected on device")
        with pytest.raises(TezosError) as exc_info:
            await ledger_sign(ed_key, FailingTransport(error), OPERATION)
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_bad_signature_length(self, ed_key):
        ed_key.is_ledger = True
        with pytest.raises(LedgerError):
            await ledger_sign(ed_key, ShortSignatureTransport(), OPERATION)

    def test_transport_is_abstract(self):
        with pytest.raises(TypeError):
            LedgerTransport()
