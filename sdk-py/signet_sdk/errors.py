"""
Signet error types
"""

from typing import Any, Sequence


class SignetError(Exception):
    """Base class for errors raised by the Signet SDK."""


class InvalidArgumentError(SignetError, ValueError):
    """Raised when a caller passes something that is not a valid argument."""


class AuthMismatchError(SignetError):
    """
    Raised when a supplied HMAC does not match the one calculated locally.

    Usually this means some value, such as the subscriber ID or the signing
    key, differed between the side that created the HMAC and the side that
    checked it.

    Attributes:
        hmac_code: The HMAC supplied with the request
        calculated_hmac: The HMAC calculated from the signing key and params
        params: The parameters the HMAC was checked against, as passed in
    """

    def __init__(self, hmac_code: Any, calculated_hmac: str, params: Sequence[Any]):
        super().__init__("Error: Invalid request signature.")
        self.hmac_code = hmac_code
        self.calculated_hmac = calculated_hmac
        self.params = params

    def __repr__(self) -> str:
        return (
            f"AuthMismatchError(hmac_code={self.hmac_code!r}, "
            f"calculated_hmac={self.calculated_hmac!r}, "
            f"param_count={len(self.params) if hasattr(self.params, '__len__') else None})"
        )
