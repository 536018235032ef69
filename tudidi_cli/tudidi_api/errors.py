"""
Error types raised by the Tudidi API layer.

Front-ends catch TudidiError and render the message; nothing here is retried.
"""

from typing import Optional


class TudidiError(Exception):
    """Base class for every error raised by the Tudidi client."""


class ReadonlyViolation(TudidiError):
    def __init__(self, method: str = "", path: str = ""):
        self.method = method
        self.path = path
        super().__init__("operation not allowed in readonly mode")


class SerializationError(TudidiError):
    """Request payload could not be encoded as JSON."""


class TransportError(TudidiError):
    """Connection refused, timeout, DNS failure and friends."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class NotFound(TudidiError):
    def __init__(self, path: str = ""):
        self.path = path
        super().__init__("resource not found")


class UnexpectedStatus(TudidiError):
    def __init__(self, status_code: int, path: str = ""):
        self.status_code = status_code
        self.path = path
        super().__init__(f"unexpected status: {status_code}")


class DecodeError(TudidiError):
    """Response body was not the JSON shape we asked for."""


class ValidationError(TudidiError):
    """Caller-supplied input was rejected before any request was made."""


class AuthenticationError(TudidiError):
    """Login failed. Fatal at startup."""


class ConfigError(TudidiError):
    """Missing or invalid process configuration. Fatal at startup."""
