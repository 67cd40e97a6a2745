"""Error kinds raised by the OTP core."""

ERROR_MESSAGE = "Could not generate code, check your secret."


class OTPError(Exception):
    """Base class for failures that leave no code to display."""


class InvalidSecret(OTPError, ValueError):
    """Raised when a secret decodes to zero usable key bytes."""


class GenerationFailed(OTPError, RuntimeError):
    """Raised when the HMAC primitive cannot produce a usable digest."""
