"""
Hardware wallet delegation.

The key core does not talk to devices. A LedgerTransport implementation is
handed in by the caller; ledger_sign prepares the payload from the key's
delegation settings and packages the device signature.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from ..runtime.errors import LedgerError, TezosError
from .signer import SignedBytes, package_signature, watermarked_payload

if TYPE_CHECKING:
    from ..keys.key import Key

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 64


class LedgerTransport(ABC):
    """
    Abstract hardware transport.
    """

    @abstractmethod
    async def sign(self, path: str, curve: int, payload: bytes) -> bytes:
        """
        Sign a (watermarked) payload on the device.

        Args:
            path: BIP32 derivation path
            curve: Device curve selector
            payload: Bytes to sign

        Returns:
            64-byte raw signature
        """


async def ledger_sign(
    key: "Key",
    transport: LedgerTransport,
    message: str,
    watermark: Optional[bytes] = None,
) -> SignedBytes:
    """
    Sign a hex payload through a hardware transport.

    Args:
        key: Ready key flagged with is_ledger
        transport: Device transport
        message: Hex payload
        watermark: Optional operation watermark

    Returns:
        SignedBytes for the payload

    Raises:
        LedgerError: If the key is not a ledger key or the device fails
    """
    if not key.is_ledger:
        raise LedgerError("Key is not configured for ledger signing")

    curve = key.curve
    payload = watermarked_payload(message, watermark)

    try:
        signature = await transport.sign(key.ledger_path, key.ledger_curve, payload)
    except TezosError:
        raise
    except Exception as e:
        raise LedgerError(f"Ledger signing failed: {e}", cause=e) from e

    signature = bytes(signature)
    if len(signature) != SIGNATURE_LENGTH:
        raise LedgerError(
            f"Ledger returned a {len(signature)} byte signature",
            details={"path": key.ledger_path},
        )

    logger.debug("Ledger signed %d byte payload at %s", len(payload), key.ledger_path)
    return package_signature(curve, message, signature)


__all__ = [
    "LedgerTransport",
    "ledger_sign",
]
