from types import SimpleNamespace

import pytest

from totp_core import otp_core
from totp_core.exceptions import OtpComputationError
from totp_core.otp_core import (
    dynamic_truncate,
    hotp,
    int_to_bytes,
    remaining_time,
    time_counter,
    totp,
)

RFC4226_CODES = [
    "755224", "287082", "359152", "969429", "338314",
    "254676", "287922", "162583", "399871", "520489",
]


@pytest.mark.parametrize("counter,expected", list(enumerate(RFC4226_CODES)))
def test_hotp_rfc4226_vectors(rfc_key, counter, expected):
    assert hotp(rfc_key, counter, 6) == expected


@pytest.mark.parametrize("now,expected", [
    (59, "94287082"),
    (1111111109, "07081804"),
    (1111111111, "14050471"),
    (1234567890, "89005924"),
    (2000000000, "69279037"),
    (20000000000, "65353130"),
])
def test_totp_rfc6238_sha1_vectors(rfc_key, now, expected):
    assert totp(rfc_key, now, 30, 8) == expected


def test_dynamic_truncate_rfc4226_example():
    digest = bytes.fromhex("1f8698690e02ca16618550ef7f19da8e945b555a")
    assert dynamic_truncate(digest) == 0x50EF7F19


def test_int_to_bytes_is_big_endian_uint64():
    assert int_to_bytes(1) == b"\x00" * 7 + b"\x01"
    assert int_to_bytes(2 ** 64 - 1) == b"\xff" * 8
    assert int_to_bytes(-1) == b"\xff" * 8


@pytest.mark.parametrize("digits", range(4, 11))
def test_code_width_matches_digits(rfc_key, digits):
    for counter in range(200):
        code = hotp(rfc_key, counter, digits)
        assert len(code) == digits
        assert code.isdigit()
        assert int(code) < 10 ** digits


def test_short_codes_are_zero_padded(rfc_key):
    # RFC 6238 vector at t=1111111109 starts with a zero
    assert totp(rfc_key, 1111111109, 30, 8).startswith("0")


def test_empty_key_is_usable():
    assert len(hotp(b"", 0, 6)) == 6


@pytest.mark.parametrize("period", [15, 16, 30, 45, 60, 299, 300])
def test_remaining_time_range(period):
    for now in list(range(0, 3 * period + 1)) + [1_700_000_000, 1_700_000_001]:
        assert 0 < remaining_time(now, period) <= period


def test_remaining_time_is_full_period_on_boundary():
    assert remaining_time(60, 30) == 30
    assert remaining_time(59, 30) == 1
    assert remaining_time(61, 30) == 29


def test_time_counter():
    assert time_counter(0, 30) == 0
    assert time_counter(29, 30) == 0
    assert time_counter(30, 30) == 1
    assert time_counter(59.9, 30) == 1


def test_same_window_same_code_next_window_differs(rfc_key):
    assert totp(rfc_key, 30, 30, 6) == totp(rfc_key, 59, 30, 6) == "287082"
    assert totp(rfc_key, 60, 30, 6) == "359152"


def test_mac_failure_raises_instead_of_zero_code(monkeypatch, rfc_key):
    def broken_new(*args, **kwargs):
        raise ValueError("unsupported hash type sha1")

    monkeypatch.setattr(otp_core, "hmac", SimpleNamespace(new=broken_new))
    with pytest.raises(OtpComputationError) as excinfo:
        hotp(rfc_key, 0, 6)
    assert isinstance(excinfo.value.__cause__, ValueError)
