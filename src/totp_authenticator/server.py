"""totp_authenticator — MCP server exposing offline TOTP code generation.

Provides tools for AI agents to compute RFC 6238 codes from a Base32 shared
secret. Nothing is stored: the secret lives only for the duration of a call
and is never logged or echoed back.
"""

import json

from mcp.server.fastmcp import FastMCP

from totp_authenticator.config import Config, _env_bool
from totp_authenticator.log import logger
from totp_authenticator.otp import totp
from totp_authenticator.otp.errors import ERROR_MESSAGE, OTPError

mcp = FastMCP("totp_authenticator")


# ── Tools ─────────────────────────────────────────────────────────────────────


@mcp.tool(
    name="totp_generate",
    annotations={
        "title": "Generate TOTP Code",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": False,
    },
)
async def totp_generate(
    secret: str,
    time_step: int = 30,
    digits: int = 6,
) -> str:
    """Generate the current one-time code for a Base32 shared secret.

    Spaces, hyphens, padding and lowercase letters in the secret are accepted.
    The code is valid until the current time window ends.

    Args:
        secret: Base32 TOTP secret (e.g., 'JBSW Y3DP EHPK 3PXP').
        time_step: Window length in seconds (default 30).
        digits: Number of digits in the code (default 6).

    Returns:
        JSON: {"code": str, "remaining_seconds": int, "progress": float, "time_step": int, "digits": int}
        Error: {"error": str}
    """
    try:
        config = Config(
            time_step=time_step,
            digits=digits,
            strict_base32=_env_bool("TOTP_STRICT_BASE32", False),
        )
    except ValueError as exc:
        return json.dumps({"error": str(exc)}, indent=2)

    now = totp.current_time()
    try:
        code = await totp.generate_async(
            secret,
            config.time_step,
            config.digits,
            now=now,
            strict=config.strict_base32,
        )
    except OTPError as exc:
        logger.warning("totp_generate failed: %s", type(exc).__name__)
        return json.dumps({"error": ERROR_MESSAGE}, indent=2)

    return json.dumps({
        "code": code,
        "remaining_seconds": totp.remaining_seconds(config.time_step, now=now),
        "progress": round(totp.window_progress(config.time_step, now=now), 3),
        "time_step": config.time_step,
        "digits": config.digits,
    }, indent=2)


@mcp.tool(
    name="totp_remaining",
    annotations={
        "title": "Seconds Left in TOTP Window",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": False,
    },
)
async def totp_remaining(time_step: int = 30) -> str:
    """Report how long the current time window has left.

    Args:
        time_step: Window length in seconds (default 30).

    Returns:
        JSON: {"remaining_seconds": int, "progress": float, "time_step": int}
        Error: {"error": str}
    """
    if time_step < 1:
        return json.dumps({"error": f"time_step must be positive, got {time_step}"}, indent=2)

    now = totp.current_time()
    return json.dumps({
        "remaining_seconds": totp.remaining_seconds(time_step, now=now),
        "progress": round(totp.window_progress(time_step, now=now), 3),
        "time_step": time_step,
    }, indent=2)


def main():
    mcp.run()


if __name__ == "__main__":
    main()
