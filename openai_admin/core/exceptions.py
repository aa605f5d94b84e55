"""
Error types raised by the admin CLI.

Every failure path raises one of these so command handlers can report a
distinguishable message instead of printing a default or empty value.
"""

from typing import Optional


class AdminCliError(RuntimeError):
    """Base class for admin CLI failures."""


class TransportError(AdminCliError):
    """Raised when a request fails at the network, HTTP or decode level."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(AdminCliError):
    """Raised when a required identifier, flag or credential is missing."""


class MissingSecretValue(AdminCliError):
    """Raised when a create response carries no recognizable secret field."""
