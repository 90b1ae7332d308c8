"""
base32.py — Lenient Base32 decoder for human-typed shared secrets.

Unlike `base64.b32decode`, this decoder never rejects its input:
- lowercase is accepted (input is uppercased first),
- every character outside A-Z / 2-7 is dropped, so '=' padding and
  whitespace (e.g. "JBSW Y3DP EHPK 3PXP") are ignored wherever they appear,
- trailing bits that do not complete a byte are discarded.

An empty (or fully stripped) input decodes to b"" which is still a usable
HMAC key.
"""

import re

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

BITS_PER_CHAR = 5
BITS_PER_BYTE = 8

_NON_ALPHABET = re.compile(r"[^A-Z2-7]")


def char_value(c: str) -> int:
    """
    Map a Base32 character to its 5-bit value.

    A..Z -> 0..25, 2..7 -> 26..31. Anything else maps to 0; `decode` strips
    such characters beforehand, so this branch only matters for direct calls.
    """
    if "A" <= c <= "Z":
        return ord(c) - ord("A")
    if "2" <= c <= "7":
        return ord(c) - ord("2") + 26
    return 0


def decode(text: str) -> bytes:
    """
    Decode Base32 text into raw key bytes.

    Steps:
    1. Uppercase and strip everything not in the alphabet
    2. Push 5 bits per character into a bit buffer (MSB first)
    3. Each time >= 8 bits are buffered, emit the high 8 bits as one byte

    Returns:
        bytes of length floor(len(filtered) * 5 / 8)
    """
    filtered = _NON_ALPHABET.sub("", text.upper())

    out = bytearray()
    buffer = 0
    bits_left = 0
    for c in filtered:
        buffer = ((buffer << BITS_PER_CHAR) | char_value(c)) & 0xFFFF
        bits_left += BITS_PER_CHAR
        if bits_left >= BITS_PER_BYTE:
            out.append((buffer >> (bits_left - BITS_PER_BYTE)) & 0xFF)
            bits_left -= BITS_PER_BYTE
    return bytes(out)
