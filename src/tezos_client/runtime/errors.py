"""
Tezos Key Error Model

This module provides the error handling framework for the key core. Every
failure raised by codec, initializer, key accessors and signers is a
TezosError carrying a stable ErrorCode.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for the key core."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    DECODE_ERROR = 100
    INVALID_HEX = 101

    # Passphrase / encryption errors (300-399)
    MISSING_PASSPHRASE = 300
    DECRYPTION_FAILED = 301

    # Signature errors (500-599)
    INVALID_SIGNATURE = 500
    CURVE_MISMATCH = 501
    LEDGER_SIGNING_REQUIRED = 502
    LEDGER_ERROR = 503

    # Key errors (700-799)
    INVALID_KEY = 700
    INVALID_CURVE_PREFIX = 701
    INVALID_KEY_LENGTH = 702
    INVALID_KEY_TAG = 703
    UNSUPPORTED_CURVE = 704
    NO_SECRET_KEY = 705
    MISSING_PUBLIC_KEY = 706
    KEY_NOT_READY = 707


class TezosError(Exception):
    """
    Base class for all key core errors.

    Provides structured error information: a message, a code, optional
    details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a key core error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TezosError":
        """Create error from dictionary representation."""
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = data.get("message", "Unknown error")
        details = data.get("details")
        error_cls = _ERRORS_BY_CODE.get(code)
        if error_cls is None:
            return TezosError(message, code, details)
        if error_cls is DecodeError:
            return DecodeError(message, code, details)
        return error_cls(message, details=details)


class DecodeError(TezosError):
    """Bad base58check prefix/checksum or malformed hex."""

    def __init__(self, message: str = "Unable to decode value", code: ErrorCode = ErrorCode.DECODE_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class KeyFormatError(TezosError):
    """Errors raised while classifying a key encoding."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_KEY,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class InvalidCurvePrefixError(KeyFormatError):
    """Key encoding does not start with a known curve tag."""

    def __init__(self, message: str = "Invalid prefix for a key encoding",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_CURVE_PREFIX, details, cause)


class InvalidKeyLengthError(KeyFormatError):
    """Key encoding has an impossible length."""

    def __init__(self, message: str = "Invalid length for a key encoding",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY_LENGTH, details, cause)


class InvalidKeyTagError(KeyFormatError):
    """Key encoding carries neither a pk nor an sk tag."""

    def __init__(self, message: str = "Invalid tag for a key encoding",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY_TAG, details, cause)


class InvalidKeyError(KeyFormatError):
    """Key material could not be derived."""

    def __init__(self, message: str = "Invalid key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY, details, cause)


class UnsupportedCurveError(TezosError):
    """Curve is recognised but the operation is not implemented for it."""

    def __init__(self, message: str = "Provided curve not supported",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_CURVE, details, cause)


class PassphraseError(TezosError):
    """Passphrase handling errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.MISSING_PASSPHRASE,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MissingPassphraseError(PassphraseError):
    """Encrypted or fundraiser key supplied without a passphrase."""

    def __init__(self, message: str = "Passphrase required",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MISSING_PASSPHRASE, details, cause)


class DecryptionFailedError(PassphraseError):
    """Encrypted key could not be opened.

    Wrong passphrase and corrupted ciphertext are reported the same way.
    """

    def __init__(self, message: str = "Unable to decrypt key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DECRYPTION_FAILED, details, cause)


class NoSecretKeyError(TezosError):
    """Operation needs a secret key the Key does not hold."""

    def __init__(self, message: str = "Secret key not known",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NO_SECRET_KEY, details, cause)


class MissingPublicKeyError(TezosError):
    """Operation needs a public key the Key does not hold."""

    def __init__(self, message: str = "Cannot verify without a public key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MISSING_PUBLIC_KEY, details, cause)


class KeyNotReadyError(TezosError):
    """Key accessed before initialization completed, or after it failed."""

    def __init__(self, message: str = "Key is not ready",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.KEY_NOT_READY, details, cause)


class SignatureError(TezosError):
    """Signing and verification errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_SIGNATURE,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class InvalidSignatureError(SignatureError):
    """Signature could not be checked."""

    def __init__(self, message: str = "Signature is invalid",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_SIGNATURE, details, cause)


class CurveMismatchError(SignatureError):
    """Signature curve differs from the key curve."""

    def __init__(self, message: str = "Signature and public key curves mismatch",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.CURVE_MISMATCH, details, cause)


class LedgerSigningRequiredError(SignatureError):
    """Key is flagged for hardware signing and holds no usable local secret."""

    def __init__(self, message: str = "Ledger key must be signed through a transport",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.LEDGER_SIGNING_REQUIRED, details, cause)


class LedgerError(SignatureError):
    """Hardware transport failed to produce a signature."""

    def __init__(self, message: str = "Ledger transport error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.LEDGER_ERROR, details, cause)


_ERRORS_BY_CODE = {
    ErrorCode.DECODE_ERROR: DecodeError,
    ErrorCode.INVALID_HEX: DecodeError,
    ErrorCode.INVALID_CURVE_PREFIX: InvalidCurvePrefixError,
    ErrorCode.INVALID_KEY_LENGTH: InvalidKeyLengthError,
    ErrorCode.INVALID_KEY_TAG: InvalidKeyTagError,
    ErrorCode.INVALID_KEY: InvalidKeyError,
    ErrorCode.UNSUPPORTED_CURVE: UnsupportedCurveError,
    ErrorCode.MISSING_PASSPHRASE: MissingPassphraseError,
    ErrorCode.DECRYPTION_FAILED: DecryptionFailedError,
    ErrorCode.NO_SECRET_KEY: NoSecretKeyError,
    ErrorCode.MISSING_PUBLIC_KEY: MissingPublicKeyError,
    ErrorCode.KEY_NOT_READY: KeyNotReadyError,
    ErrorCode.INVALID_SIGNATURE: InvalidSignatureError,
    ErrorCode.CURVE_MISMATCH: CurveMismatchError,
    ErrorCode.LEDGER_SIGNING_REQUIRED: LedgerSigningRequiredError,
    ErrorCode.LEDGER_ERROR: LedgerError,
}


# Re-export key error types for convenience
__all__ = [
    "ErrorCode",
    "TezosError",
    "DecodeError",
    "KeyFormatError",
    "InvalidCurvePrefixError",
    "InvalidKeyLengthError",
    "InvalidKeyTagError",
    "InvalidKeyError",
    "UnsupportedCurveError",
    "PassphraseError",
    "MissingPassphraseError",
    "DecryptionFailedError",
    "NoSecretKeyError",
    "MissingPublicKeyError",
    "KeyNotReadyError",
    "SignatureError",
    "InvalidSignatureError",
    "CurveMismatchError",
    "LedgerSigningRequiredError",
    "LedgerError",
]
