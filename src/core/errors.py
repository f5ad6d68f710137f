"""Exception hierarchy for the Incapsula site binding.

The lifecycle operations never wrap these: whatever the client raises is
logged and re-raised as is.
"""

from __future__ import annotations


class IncapsulaError(Exception):
    """Base exception for every error raised by this project."""


# --- Configuration ---
class ConfigurationError(IncapsulaError):
    """Missing or invalid settings (credentials, base URL)."""


class StateError(IncapsulaError):
    """The local state file is unreadable or malformed."""


# --- Remote API ---
class IncapsulaTransportError(IncapsulaError):
    """The HTTP request could not be completed (DNS, TLS, timeout...)."""


class IncapsulaHTTPError(IncapsulaError):
    """The service answered with a non-200 status code."""

    def __init__(self, message: str, *, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class IncapsulaResponseError(IncapsulaError):
    """The service answered 200 but the body is not the expected JSON."""


class IncapsulaAPIError(IncapsulaError):
    """The service reported a failure through a non-zero `res` code."""

    def __init__(self, message: str, *, res: int, res_message: str = "") -> None:
        super().__init__(message)
        self.res = res
        self.res_message = res_message
