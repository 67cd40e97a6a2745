"""Stderr logger for the authenticator.

The MCP stdio transport and the watch CLI both own stdout, so all logging
goes to stderr. Secrets and generated codes are never logged.

Set ``TOTP_DEBUG=1`` to include per-call counter details.
"""

import logging
import os
import sys

_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))

logger = logging.getLogger("totp_authenticator")
logger.addHandler(_handler)
logger.propagate = False


def level_from_env() -> int:
    flag = os.getenv("TOTP_DEBUG", "").strip().lower()
    return logging.DEBUG if flag in ("1", "true", "yes", "on") else logging.INFO


logger.setLevel(level_from_env())


def debug_detail(message: str) -> None:
    logger.debug(message)
