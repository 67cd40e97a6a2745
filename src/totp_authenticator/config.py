"""Runtime configuration with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {value!r}") from None


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"{key} must be a boolean flag, got {value!r}")


@dataclass(frozen=True)
class Config:
    """Parameters shared by the ticker, the watch CLI and the MCP server."""

    time_step: int = 30
    digits: int = 6
    strict_base32: bool = False
    poll_interval: float = 0.5
    urgent_threshold: int = 5

    def __post_init__(self) -> None:
        if self.time_step < 1:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if self.digits < 1:
            raise ValueError(f"digits must be positive, got {self.digits}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")

    @classmethod
    def from_env(cls) -> "Config":
        """Build a config from ``TOTP_*`` environment variables."""
        return cls(
            time_step=_env_int("TOTP_TIME_STEP", 30),
            digits=_env_int("TOTP_DIGITS", 6),
            strict_base32=_env_bool("TOTP_STRICT_BASE32", False),
            poll_interval=_env_float("TOTP_POLL_INTERVAL", 0.5),
        )
