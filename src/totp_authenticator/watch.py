"""Terminal countdown display for a single secret.

The secret is read with :func:`getpass.getpass` so it never lands in shell
history or the process list, and it is dropped when the process exits.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from typing import List, Optional, TextIO

from totp_authenticator.config import Config
from totp_authenticator.ticker import Tick, TotpTicker


def render(tick: Tick) -> str:
    marker = "!" if tick.urgent else " "
    return f"{tick.display_code}  {tick.remaining:>2}s{marker}"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="totp-watch",
        description="Show a live TOTP code for a Base32 secret. Nothing is stored.",
    )
    parser.add_argument("--time-step", type=int, default=None, help="window length in seconds")
    parser.add_argument("--digits", type=int, default=None, help="code length")
    parser.add_argument("--strict", action="store_true", help="reject non-Base32 characters")
    return parser


def _resolve_config(args: argparse.Namespace) -> Config:
    base = Config.from_env()
    return Config(
        time_step=args.time_step if args.time_step is not None else base.time_step,
        digits=args.digits if args.digits is not None else base.digits,
        strict_base32=args.strict or base.strict_base32,
        poll_interval=base.poll_interval,
        urgent_threshold=base.urgent_threshold,
    )


def main(argv: Optional[List[str]] = None, out: TextIO = sys.stdout) -> int:
    args = _build_parser().parse_args(argv)
    try:
        config = _resolve_config(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    errors: List[str] = []

    def on_tick(tick: Tick) -> None:
        print(render(tick), file=out, flush=True)

    try:
        secret = getpass.getpass("Secret: ")
    except (KeyboardInterrupt, EOFError):
        print(file=sys.stderr)
        return 0

    ticker = TotpTicker(config, on_tick=on_tick, on_error=errors.append)
    ticker.start(secret)
    if not ticker.secret_active and not errors:
        print("error: no secret entered", file=sys.stderr)
        return 1

    try:
        asyncio.run(ticker.run())
    except KeyboardInterrupt:
        ticker.stop()
        return 0

    if errors:
        print(f"error: {errors[-1]}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
