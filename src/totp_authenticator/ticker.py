"""Polling loop that turns the stateless engine into a live display feed.

The ticker asks the engine for a code on a fixed cadence and reports a
:class:`Tick` whenever the code or the countdown changes. Rendering is left
to the ``on_tick`` / ``on_error`` callbacks.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from totp_authenticator.config import Config
from totp_authenticator.log import logger
from totp_authenticator.otp import base32, totp
from totp_authenticator.otp.errors import ERROR_MESSAGE, OTPError

PLACEHOLDER = "------"


@dataclass(frozen=True)
class Tick:
    """One rendered state of the countdown display."""

    code: str
    remaining: int
    time_step: int
    urgent_threshold: int = 5

    @property
    def progress(self) -> float:
        return (self.time_step - self.remaining) / self.time_step

    @property
    def urgent(self) -> bool:
        return self.remaining <= self.urgent_threshold

    @property
    def display_code(self) -> str:
        """The code split into two groups, e.g. ``"123 456"``."""
        half = len(self.code) // 2
        if not half:
            return self.code
        return f"{self.code[:half]} {self.code[half:]}"


class TotpTicker:
    """Drive periodic code generation for a single secret at a time."""

    def __init__(
        self,
        config: Config,
        on_tick: Callable[[Tick], None],
        on_error: Callable[[str], None],
        clock: Callable[[], float] = time.time,
        sign: totp.Signer = totp.hmac_sha1,
    ):
        self._config = config
        self._on_tick = on_tick
        self._on_error = on_error
        self._clock = clock
        self._sign = sign
        self._secret = ""
        self._failed = ""
        self._last: Optional[Tick] = None
        self.code = PLACEHOLDER

    @property
    def secret_active(self) -> bool:
        return bool(self._secret)

    def start(self, secret: str) -> None:
        """Switch to ``secret``; an empty value stops the ticker."""
        normalized = base32.normalize(secret)
        if not normalized:
            self.stop()
            self._failed = ""
            return
        # Unchanged input, running or already rejected.
        if normalized in (self._secret, self._failed):
            return
        self.stop()
        self._failed = ""
        self._secret = normalized
        logger.info("Ticker started (%d-character secret)", len(normalized))
        self.poll()

    def stop(self) -> None:
        if self._secret:
            logger.info("Ticker stopped")
        self._secret = ""
        self._last = None
        self.code = PLACEHOLDER

    def poll(self) -> Optional[Tick]:
        """Run one tick; returns the emitted :class:`Tick`, if any."""
        if not self._secret:
            return None
        secret, now = self._secret, self._clock()
        try:
            code = totp.generate(secret, *self._params(), now=now, sign=self._sign,
                                 strict=self._config.strict_base32)
        except OTPError as exc:
            self._fail(secret, exc)
            return None
        return self._publish(secret, code, now)

    async def run(self) -> None:
        """Poll every ``poll_interval`` seconds until the ticker is stopped."""
        while self._secret:
            secret, now = self._secret, self._clock()
            try:
                code = await totp.generate_async(secret, *self._params(), now=now, sign=self._sign,
                                                 strict=self._config.strict_base32)
            except OTPError as exc:
                self._fail(secret, exc)
                continue
            self._publish(secret, code, now)
            await asyncio.sleep(self._config.poll_interval)

    def _params(self) -> Tuple[int, int]:
        return self._config.time_step, self._config.digits

    def _fail(self, secret: str, exc: OTPError) -> None:
        if secret != self._secret:
            return
        logger.warning("Code generation failed: %s", type(exc).__name__)
        self.stop()
        self._failed = secret
        self._on_error(ERROR_MESSAGE)

    def _publish(self, secret: str, code: str, now: float) -> Optional[Tick]:
        # Input changed while this result was being computed.
        if secret != self._secret:
            return None

        cfg = self._config
        tick = Tick(
            code=code,
            remaining=totp.remaining_seconds(cfg.time_step, now=now),
            time_step=cfg.time_step,
            urgent_threshold=cfg.urgent_threshold,
        )
        if tick == self._last:
            return None
        self._last = tick
        self.code = code
        self._on_tick(tick)
        return tick
