"""
Curve-dispatched signing and verification.

Payloads are hex text. A watermark, when given, is prepended to the raw bytes
before they are hashed with the 32-byte generic hash; the digest is what gets
signed. Only Ed25519 is implemented. secp256k1 and P-256 fail with
UnsupportedCurveError.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..codec.base58check import b58c_decode, b58c_encode
from ..codec.buffers import bytes_to_hex, hex_to_bytes, merge_bytes
from ..codec.prefixes import PREFIX, prefix_for
from ..crypto.provider import PrimitiveProvider, get_default_provider
from ..curves import Curve
from ..runtime.errors import (
    CurveMismatchError,
    InvalidSignatureError,
    MissingPublicKeyError,
    NoSecretKeyError,
    TezosError,
    UnsupportedCurveError,
)

logger = logging.getLogger(__name__)

DIGEST_LENGTH = 32


@dataclass(frozen=True)
class SignedBytes:
    """
    Result of signing a payload.

    Attributes:
        bytes: The hex payload as given (without watermark)
        sig: Signature with the generic ``sig`` prefix
        edsig: Signature with the curve prefix
        sbytes: Payload hex followed by the raw signature hex
    """
    bytes: str
    sig: str
    edsig: str
    sbytes: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bytes": self.bytes,
            "sig": self.sig,
            "edsig": self.edsig,
            "sbytes": self.sbytes,
        }


def watermarked_payload(message: str, watermark: Optional[bytes] = None) -> bytes:
    """Decode hex payload and prepend the watermark, if any."""
    payload = hex_to_bytes(message)
    if watermark is not None:
        payload = merge_bytes(watermark, payload)
    return payload


def package_signature(curve: Curve, message: str, signature: bytes) -> SignedBytes:
    """Encode a raw signature in every form callers need."""
    return SignedBytes(
        bytes=message,
        sig=b58c_encode(signature, PREFIX["sig"]),
        edsig=b58c_encode(signature, prefix_for(curve.signature_tag)),
        sbytes=message + bytes_to_hex(signature),
    )


def sign_bytes(
    curve: Curve,
    secret_key: Optional[bytes],
    message: str,
    watermark: Optional[bytes] = None,
    provider: Optional[PrimitiveProvider] = None,
) -> SignedBytes:
    """
    Sign a hex payload.

    Args:
        curve: Key curve
        secret_key: 64-byte Ed25519 secret key
        message: Hex payload
        watermark: Optional operation watermark
        provider: Primitive provider

    Returns:
        SignedBytes for the payload

    Raises:
        UnsupportedCurveError: For secp256k1 and P-256 keys
        NoSecretKeyError: If no secret key is available
        DecodeError: If the payload is not hex
    """
    if curve is not Curve.ED25519:
        raise UnsupportedCurveError(f"Signing with curve '{curve.value}' is not supported")
    if secret_key is None:
        raise NoSecretKeyError("Cannot sign without a secret key")

    provider = provider or get_default_provider()
    payload = watermarked_payload(message, watermark)
    digest = provider.generic_hash(DIGEST_LENGTH, payload)
    signature = provider.sign_detached(digest, secret_key)

    logger.debug("Signed %d byte payload with %s key", len(payload), curve.value)
    return package_signature(curve, message, signature)


def decode_signature(signature: str, curve: Curve) -> bytes:
    """Decode a generic ``sig`` or curve-prefixed signature string."""
    if signature.startswith("sig"):
        return b58c_decode(signature, PREFIX["sig"])
    return b58c_decode(signature, prefix_for(curve.signature_tag))


def verify_bytes(
    curve: Curve,
    public_key: Optional[bytes],
    message: str,
    signature: str,
    watermark: Optional[bytes] = None,
    provider: Optional[PrimitiveProvider] = None,
) -> bool:
    """
    Verify a signature over a hex payload.

    Returns:
        True if the signature matches, False if a well-formed signature does
        not match

    Raises:
        MissingPublicKeyError: If no public key is available
        CurveMismatchError: If a curve-prefixed signature belongs to another curve
        UnsupportedCurveError: For secp256k1 and P-256 keys
        InvalidSignatureError: If the signature or payload is malformed
    """
    if not public_key:
        raise MissingPublicKeyError()

    if not signature.startswith("sig") and signature[:2] != curve.value:
        raise CurveMismatchError(details={"key": curve.value, "signature": signature[:2]})

    if curve is not Curve.ED25519:
        raise UnsupportedCurveError(f"Curve '{curve.value}' not supported")

    provider = provider or get_default_provider()
    try:
        signature_bytes = decode_signature(signature, curve)
        payload = watermarked_payload(message, watermark)
        digest = provider.generic_hash(DIGEST_LENGTH, payload)
        return provider.verify_detached(signature_bytes, digest, public_key)
    except InvalidSignatureError:
        raise
    except TezosError as e:
        raise InvalidSignatureError(cause=e) from e


__all__ = [
    "SignedBytes",
    "watermarked_payload",
    "package_signature",
    "sign_bytes",
    "decode_signature",
    "verify_bytes",
]
