import io

import pytest

from totp_authenticator import watch
from totp_authenticator.ticker import Tick


def test_render_marks_urgent_window() -> None:
    assert watch.render(Tick(code="123456", remaining=12, time_step=30)) == "123 456  12s "
    assert watch.render(Tick(code="123456", remaining=3, time_step=30)) == "123 456   3s!"


def test_main_reports_invalid_secret(monkeypatch, capsys) -> None:
    monkeypatch.setattr(watch.getpass, "getpass", lambda prompt: "!!!")
    out = io.StringIO()

    assert watch.main([], out=out) == 1
    assert out.getvalue() == ""
    assert "check your secret" in capsys.readouterr().err


def test_main_requires_a_secret(monkeypatch, capsys) -> None:
    monkeypatch.setattr(watch.getpass, "getpass", lambda prompt: "  ")
    assert watch.main([]) == 1
    assert "no secret" in capsys.readouterr().err


def test_main_rejects_bad_options(capsys) -> None:
    assert watch.main(["--digits", "0"]) == 2
    assert "digits" in capsys.readouterr().err


def test_main_prints_ticks_until_interrupted(monkeypatch) -> None:
    monkeypatch.setattr(watch.getpass, "getpass", lambda prompt: "JBSWY3DPEHPK3PXP")

    def interrupt(coro):
        coro.close()
        raise KeyboardInterrupt

    monkeypatch.setattr(watch.asyncio, "run", interrupt)
    out = io.StringIO()

    assert watch.main(["--time-step", "30"], out=out) == 0
    line = out.getvalue().strip()
    assert len(line.split()[0] + line.split()[1]) == 6


@pytest.mark.parametrize("exc", [KeyboardInterrupt, EOFError])
def test_main_exits_quietly_at_prompt(monkeypatch, exc) -> None:
    def abort(prompt):
        raise exc

    monkeypatch.setattr(watch.getpass, "getpass", abort)
    out = io.StringIO()

    assert watch.main([], out=out) == 0
    assert out.getvalue() == ""
