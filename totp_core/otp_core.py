"""
otp_core.py — Core HOTP / TOTP algorithm (RFC 4226 & RFC 6238).

Pure functions working on already-decoded key bytes. Decoding the Base32
secret lives in `base32.py`; caching decoded keys lives in `generator.py`.

Algorithm summary:
- HOTP: code = Truncate(HMAC-SHA1(key, counter)) mod 10^digits
- TOTP: HOTP with counter = floor(unix_time / period)

Lưu ý bảo mật:
- HMAC-SHA1 is what Google Authenticator & co. expect; do not swap it.
- A MAC failure raises OtpComputationError, it never yields a zero code.
"""

import hashlib
import hmac
import struct
import time
from typing import Optional

from .exceptions import OtpComputationError

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # chuẩn: 6 chữ số
DEFAULT_TIME_STEP = 30      # TOTP step (giây)
MIN_DIGITS = 4
MAX_DIGITS = 10
MIN_TIME_STEP = 15
MAX_TIME_STEP = 300
MIN_SECRET_LENGTH = 8

HASH_OFFSET_MASK = 0x0F
HASH_MSB_MASK = 0x7F
UINT64_MASK = 0xFFFFFFFFFFFFFFFF


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Encode a counter as the 8-byte big-endian message RFC 4226 requires.

    Negative values wrap to their two's complement (uint64) form.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    return struct.pack(">Q", i & UINT64_MASK)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    - offset = low nibble of the last digest byte (0..15)
    - take 4 bytes starting at offset, clear the top bit of the first one
    - return the resulting 31-bit unsigned integer
    """
    offset = hmac_digest[-1] & HASH_OFFSET_MASK
    return (
        ((hmac_digest[offset] & HASH_MSB_MASK) << 24)
        | (hmac_digest[offset + 1] << 16)
        | (hmac_digest[offset + 2] << 8)
        | hmac_digest[offset + 3]
    )


def _hmac_sha1(key: bytes, msg: bytes) -> bytes:
    try:
        return hmac.new(key, msg, hashlib.sha1).digest()
    except ValueError as e:
        # e.g. SHA-1 disabled by the OpenSSL build / crypto policy
        raise OtpComputationError("HMAC-SHA1 is unavailable") from e


def hotp(key: bytes, counter: int, digits: int = DEFAULT_DIGITS) -> str:
    """
    Compute an HOTP code per RFC 4226.

    Steps:
    1. Message = 8-byte big-endian counter
    2. HMAC-SHA1(key, message)
    3. Dynamic truncate -> 31-bit integer
    4. otp = value % 10^digits, zero-padded to exactly `digits` characters

    Arguments:
        key: raw (decoded) secret bytes
        counter: moving factor
        digits: code length

    Raises:
        OtpComputationError: if the MAC cannot be computed
    """
    digest = _hmac_sha1(key, int_to_bytes(counter))
    otp_val = dynamic_truncate(digest) % (10 ** digits)
    return str(otp_val).zfill(digits)


def time_counter(now: int, period: int = DEFAULT_TIME_STEP) -> int:
    """Window index floor(now / period); changes once every `period` seconds."""
    return int(now) // period


def totp(key: bytes, now: Optional[int] = None, period: int = DEFAULT_TIME_STEP,
         digits: int = DEFAULT_DIGITS) -> str:
    """
    Compute a TOTP code per RFC 6238: hotp(key, floor(now / period), digits).

    Arguments:
        key: raw secret bytes
        now: epoch seconds (None -> time.time())
        period: window length in seconds
        digits: code length
    """
    if now is None:
        now = int(time.time())
    return hotp(key, time_counter(now, period), digits)


def remaining_time(now: Optional[int] = None, period: int = DEFAULT_TIME_STEP) -> int:
    """
    Seconds left in the current window, always in (0, period].

    At an exact window boundary the full period is returned: the code just
    rolled over and is valid for the whole window.
    """
    if now is None:
        now = int(time.time())
    return period - (int(now) % period)
