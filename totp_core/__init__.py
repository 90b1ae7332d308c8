"""
totp_core package
=================

TOTP (RFC 6238) / HOTP (RFC 4226) codes for authenticator-app secrets,
served as a one-shot snapshot or as a change-triggered stream.

──────────────────────────────────────────────
Giải thuật cốt lõi
──────────────────────────────────────────────
- HOTP: code = Truncate(HMAC-SHA1(key, counter)) mod 10^digits
- TOTP: HOTP with counter = floor(unix_time / period)
- Dynamic Truncation: 4 bytes picked at offset (last byte & 0x0F),
  top bit cleared.

──────────────────────────────────────────────
Cách dùng
──────────────────────────────────────────────
1. Always validate first; validation returns a value, it never raises:
        result = validate_params(secret, 6, 30)
        if result.has_error:
            return {"error": result.error}

2. Snapshot:
        record = generate_snapshot(secret, 6, 30)
        record.to_dict()  # {"code": "...", "remainingTime": 25, "progressPercent": 83.33}

3. Stream (emits immediately, then only when the code changes):
        with open_stream(secret, 6, 30) as stream:
            for record in stream:
                send(record.to_dict())

Generators are cached per (secret, digits, period) for the process
lifetime; the secret text is never logged.
"""
from .base32 import decode as decode_base32
from .exceptions import OtpComputationError, TotpError
from .generator import GeneratorCache, GeneratorConfig, TotpGenerator, default_cache
from .otp_core import (
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    hotp,
    remaining_time,
    time_counter,
    totp,
)
from .service import (
    CodeRecord,
    TotpService,
    TotpStream,
    default_service,
    generate_snapshot,
    open_stream,
)
from .validation import ValidationResult, validate_params

__all__ = [
    "CodeRecord",
    "DEFAULT_DIGITS",
    "DEFAULT_TIME_STEP",
    "GeneratorCache",
    "GeneratorConfig",
    "OtpComputationError",
    "TotpError",
    "TotpGenerator",
    "TotpService",
    "TotpStream",
    "ValidationResult",
    "decode_base32",
    "default_cache",
    "default_service",
    "generate_snapshot",
    "hotp",
    "open_stream",
    "remaining_time",
    "time_counter",
    "totp",
    "validate_params",
]
