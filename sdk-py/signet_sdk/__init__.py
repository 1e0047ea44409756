"""
Signet SDK v0.1
Canonical request signing

Canonical: ordered parameter list -> deterministic UTF-8 string
Crypto: HMAC-SHA1 sign / verify over the canonical string
"""

from .canonical import (
    Param,
    ParamKind,
    to_param,
    format_param,
    canonicalize,
    canonicalize_bytes,
)
from .crypto import sign, calculate_hmac, verify, is_valid
from .errors import SignetError, InvalidArgumentError, AuthMismatchError

__version__ = "0.1.0"
__all__ = [
    # Canonical
    "Param",
    "ParamKind",
    "to_param",
    "format_param",
    "canonicalize",
    "canonicalize_bytes",
    # Crypto
    "sign",
    "calculate_hmac",
    "verify",
    "is_valid",
    # Errors
    "SignetError",
    "InvalidArgumentError",
    "AuthMismatchError",
]
