import logging

import pytest

from totp_authenticator import log


@pytest.mark.parametrize("value,expected", [
    ("1", logging.DEBUG),
    ("true", logging.DEBUG),
    ("0", logging.INFO),
    ("", logging.INFO),
])
def test_level_from_env(monkeypatch, value: str, expected: int) -> None:
    monkeypatch.setenv("TOTP_DEBUG", value)
    assert log.level_from_env() == expected


def test_level_defaults_to_info(monkeypatch) -> None:
    monkeypatch.delenv("TOTP_DEBUG", raising=False)
    assert log.level_from_env() == logging.INFO


def test_logger_writes_to_stderr_only() -> None:
    assert log.logger.name == "totp_authenticator"
    assert not log.logger.propagate
    assert all(h.stream is not None for h in log.logger.handlers)
