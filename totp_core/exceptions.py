"""
exceptions.py — Error types raised by the TOTP core.

Validation problems are NOT exceptions: `validate_params` returns a
`ValidationResult` value. Exceptions here are reserved for failures of the
cryptographic computation itself.
"""


class TotpError(Exception):
    """Base class for every error raised by totp_core."""


class OtpComputationError(TotpError):
    """
    The HMAC primitive could not be initialized or executed.

    Raised instead of returning a code, so a failure can never be confused
    with a legitimate "000000" OTP.
    """
