"""
validation.py — Parameter checks run before any generator is built.

Trả về giá trị (ValidationResult), không raise: the transport layer decides
how to present the reason to its caller.
"""

import logging
import re
from typing import NamedTuple, Optional

from .otp_core import (
    MAX_DIGITS,
    MAX_TIME_STEP,
    MIN_DIGITS,
    MIN_SECRET_LENGTH,
    MIN_TIME_STEP,
)

logger = logging.getLogger(__name__)

# Checked against the raw text: lowercase secrets are rejected here even
# though the decoder itself would accept them.
_SECRET_PATTERN = re.compile(r"[A-Z2-7=\s]*", re.ASCII)


class ValidationResult(NamedTuple):
    valid: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(True, None)

    @classmethod
    def fail(cls, reason: str) -> "ValidationResult":
        return cls(False, reason)

    @property
    def has_error(self) -> bool:
        return not self.valid


def validate_params(secret: Optional[str], digits: int, period: int) -> ValidationResult:
    """
    Validate (secret, digits, period), stopping at the first failure.

    Order:
    1. secret non-empty after strip()
    2. stripped length >= 8
    3. raw secret matches ^[A-Z2-7=\\s]*$
    4. MIN_DIGITS <= digits <= MAX_DIGITS
    5. MIN_TIME_STEP <= period <= MAX_TIME_STEP
    """
    trimmed = (secret or "").strip()
    if not trimmed:
        logger.warning("TOTP validation failed: empty secret key")
        return ValidationResult.fail("Secret key cannot be empty")

    if len(trimmed) < MIN_SECRET_LENGTH:
        logger.warning("TOTP validation failed: secret key too short (length: %d)", len(trimmed))
        return ValidationResult.fail(
            f"Secret key must be at least {MIN_SECRET_LENGTH} characters long"
        )

    if not _SECRET_PATTERN.fullmatch(secret):
        logger.warning("TOTP validation failed: invalid Base32 characters in secret key")
        return ValidationResult.fail(
            "Secret key contains invalid Base32 characters. Only A-Z, 2-7, and = are allowed"
        )

    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        logger.warning("TOTP validation failed: invalid digits value: %s", digits)
        return ValidationResult.fail(f"Digits must be between {MIN_DIGITS} and {MAX_DIGITS}")

    if not MIN_TIME_STEP <= period <= MAX_TIME_STEP:
        logger.warning("TOTP validation failed: invalid period value: %s", period)
        return ValidationResult.fail(
            f"Period must be between {MIN_TIME_STEP} and {MAX_TIME_STEP} seconds"
        )

    logger.debug("TOTP parameters validated: digits=%d, period=%d", digits, period)
    return ValidationResult.success()
