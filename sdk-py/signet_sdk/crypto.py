"""
Request signing: HMAC-SHA1 over the canonical parameter string
"""

import base64
import logging
from typing import Any, Sequence

from cryptography.hazmat.primitives import constant_time, hashes, hmac

from .canonical import ENCODING, canonicalize_bytes
from .errors import AuthMismatchError, InvalidArgumentError

logger = logging.getLogger(__name__)

HASH_ALGORITHM = hashes.SHA1


def sign(signing_key: str, params: Sequence[Any]) -> str:
    """
    Create the BASE64-encoded HMAC-SHA1 of a parameter list.

    Args:
        signing_key: The shared secret, used as UTF-8 bytes
        params: The parameters to sign, see canonicalize()

    Returns:
        The BASE64-encoded HMAC
    """
    if not isinstance(signing_key, str):
        raise InvalidArgumentError(f"signing_key must be str, got {type(signing_key).__name__}")

    message = canonicalize_bytes(params)
    h = hmac.HMAC(signing_key.encode(ENCODING), HASH_ALGORITHM())
    h.update(message)
    signature = base64.b64encode(h.finalize()).decode("ascii")

    logger.debug("Signed %d canonical bytes", len(message))
    return signature


def calculate_hmac(signing_key: str, params: Sequence[Any]) -> str:
    """Alias of sign()."""
    return sign(signing_key, params)


def verify(hmac_code: str, signing_key: str, params: Sequence[Any]) -> None:
    """
    Check a supplied HMAC against the signing key and parameter list.

    The codes must match exactly; no whitespace trimming or case folding is
    done. Raises AuthMismatchError if they differ.
    """
    calculated = sign(signing_key, params)

    if not isinstance(hmac_code, str) or not constant_time.bytes_eq(
        hmac_code.encode(ENCODING, "surrogatepass"), calculated.encode(ENCODING)
    ):
        logger.info("Request signature mismatch")
        raise AuthMismatchError(hmac_code, calculated, params)


def is_valid(hmac_code: str, signing_key: str, params: Sequence[Any]) -> bool:
    """Verify an HMAC, return True if valid."""
    try:
        verify(hmac_code, signing_key, params)
    except AuthMismatchError:
        return False
    return True
