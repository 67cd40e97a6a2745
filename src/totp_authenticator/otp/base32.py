"""Lenient RFC 4648 Base32 decoding for user-entered secrets.

Secrets are usually pasted from a provider's setup page, so separators,
padding and case are ignored, and stray characters are skipped rather than
rejected unless strict mode is requested.
"""

from __future__ import annotations

import re

from totp_authenticator.otp.errors import InvalidSecret

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_VALUES = {char: index for index, char in enumerate(ALPHABET)}
_SEPARATORS = re.compile(r"[\s=-]+")


def normalize(value: str) -> str:
    """Strip whitespace, hyphens and padding, then uppercase."""
    return _SEPARATORS.sub("", value).upper()


def decode(value: str, strict: bool = False) -> bytes:
    """Decode a Base32 string into raw key bytes.

    Trailing bits that do not fill a whole byte are dropped. Returns
    ``b""`` when nothing decodable is left; callers decide whether that is
    an error.

    Raises:
        InvalidSecret: ``strict`` is set and a non-alphabet character is found.
    """
    buffer = 0
    bits = 0
    output = bytearray()

    for char in normalize(value):
        index = _VALUES.get(char)
        if index is None:
            if strict:
                raise InvalidSecret(f"Invalid Base32 character {char!r}")
            continue
        buffer = ((buffer << 5) | index) & 0xFFF
        bits += 5
        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)

    return bytes(output)
