"""
Local Greece - Error Types

Exception hierarchy shared across the package:
- ConfigurationError for invalid settings (raised at startup)
- BackendError and subclasses for hosted backend failures
- LocationUnavailableError when no user position can be obtained
"""

from __future__ import annotations


class LocalGreeceError(Exception):
    """Base class for all package errors."""


class ConfigurationError(LocalGreeceError, ValueError):
    """Invalid configuration, e.g. a degenerate bounding box."""


class BackendError(LocalGreeceError):
    """A request to the hosted backend failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(BackendError):
    """The requested row does not exist (or is not visible to the caller)."""


class PermissionDeniedError(BackendError):
    """The current user is not allowed to perform the operation."""


class LocationUnavailableError(LocalGreeceError):
    """The user's location is unknown (denied, unsupported or not provided)."""
