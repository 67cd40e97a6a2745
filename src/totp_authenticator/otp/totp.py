"""TOTP (RFC 6238) code generation on top of HOTP (RFC 4226).

Everything here is a pure function of the secret, the parameters and the
clock reading. No state is shared between calls, so concurrent callers need
no locking.
"""

from __future__ import annotations

import hashlib
import hmac
import struct
import time
from typing import Callable, Optional

from totp_authenticator.log import debug_detail
from totp_authenticator.otp import base32
from totp_authenticator.otp.errors import GenerationFailed, InvalidSecret

DEFAULT_TIME_STEP = 30
DEFAULT_DIGITS = 6

Signer = Callable[[bytes, bytes], bytes]


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    """Default signer: HMAC-SHA1 from the standard library."""
    return hmac.new(key, message, hashlib.sha1).digest()


def make_signer(digestmod: str) -> Signer:
    """Build a signer for any hashlib digest name (``"sha256"``, ...)."""
    hashlib.new(digestmod)

    def sign(key: bytes, message: bytes) -> bytes:
        return hmac.new(key, message, digestmod).digest()

    return sign


def encode_counter(counter: int) -> bytes:
    """Encode a counter as the 8-byte big-endian HOTP message."""
    if not 0 <= counter < 1 << 64:
        raise ValueError(f"Counter out of 64-bit range: {counter}")
    return struct.pack(">Q", counter)


def truncate(digest: bytes) -> int:
    """Dynamic truncation (RFC 4226 section 5.4) to a 31-bit integer."""
    offset = digest[-1] & 0x0F
    chunk = digest[offset:offset + 4]
    if len(chunk) != 4:
        raise ValueError(f"Digest too short for truncation: {len(digest)} bytes")
    return struct.unpack(">I", chunk)[0] & 0x7FFFFFFF


def _check_time_step(time_step: int) -> None:
    if time_step < 1:
        raise ValueError(f"time_step must be a positive number of seconds, got {time_step}")


def _check_digits(digits: int) -> None:
    if digits < 1:
        raise ValueError(f"digits must be positive, got {digits}")


def hotp(key: bytes, counter: int, digits: int = DEFAULT_DIGITS, sign: Signer = hmac_sha1) -> str:
    """Compute the HOTP value for ``counter`` as a zero-padded string."""
    _check_digits(digits)
    return _format(truncate(sign(key, encode_counter(counter))), digits)


def _format(binary: int, digits: int) -> str:
    return str(binary % 10 ** digits).zfill(digits)


def current_time() -> int:
    """System wall-clock time in whole seconds since the Unix epoch."""
    return int(time.time())


def _epoch_seconds(now: Optional[float]) -> int:
    return current_time() if now is None else int(now)


def counter_at(timestamp: float, time_step: int = DEFAULT_TIME_STEP) -> int:
    """Return the window counter for a Unix timestamp."""
    _check_time_step(time_step)
    return int(timestamp) // time_step


def generate(
    secret: str,
    time_step: int = DEFAULT_TIME_STEP,
    digits: int = DEFAULT_DIGITS,
    *,
    now: Optional[float] = None,
    sign: Signer = hmac_sha1,
    strict: bool = False,
) -> str:
    """Generate the TOTP code for ``secret`` at ``now`` (default: system clock).

    Args:
        secret: Base32 shared secret as typed or pasted by the user.
        time_step: Window length in seconds.
        digits: Length of the returned code.
        now: Unix timestamp to generate for; defaults to the current time.
        sign: HMAC primitive taking ``(key, message)`` and returning a digest.
        strict: Reject non-Base32 characters instead of skipping them.

    Raises:
        InvalidSecret: The secret holds no usable key bytes.
        GenerationFailed: The signer raised or returned an unusable digest.
    """
    _check_time_step(time_step)
    _check_digits(digits)

    key = base32.decode(secret, strict=strict)
    if not key:
        raise InvalidSecret("Secret decodes to an empty key")

    counter = counter_at(_epoch_seconds(now), time_step)
    message = encode_counter(counter)
    debug_detail(f"Generating code for counter {counter} ({len(key)}-byte key)")

    try:
        binary = truncate(sign(key, message))
    except Exception as exc:
        raise GenerationFailed(f"HMAC computation failed: {type(exc).__name__}") from exc
    return _format(binary, digits)


async def generate_async(
    secret: str,
    time_step: int = DEFAULT_TIME_STEP,
    digits: int = DEFAULT_DIGITS,
    *,
    now: Optional[float] = None,
    sign: Signer = hmac_sha1,
    strict: bool = False,
) -> str:
    """Coroutine form of :func:`generate` for event-loop callers."""
    return generate(secret, time_step, digits, now=now, sign=sign, strict=strict)


def remaining_seconds(time_step: int = DEFAULT_TIME_STEP, *, now: Optional[float] = None) -> int:
    """Seconds left in the current window, in ``[1, time_step]``."""
    _check_time_step(time_step)
    return time_step - _epoch_seconds(now) % time_step


def window_progress(time_step: int = DEFAULT_TIME_STEP, *, now: Optional[float] = None) -> float:
    """Fraction of the current window already elapsed, in ``[0, 1)``."""
    return (time_step - remaining_seconds(time_step, now=now)) / time_step
