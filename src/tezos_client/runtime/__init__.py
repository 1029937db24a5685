"""Runtime helpers for the Tezos key core"""

from .errors import ErrorCode, TezosError

__all__ = [
    "ErrorCode",
    "TezosError",
]
