"""Session adapter exception hierarchy."""

from __future__ import annotations


class SessionAdapterError(Exception):
    """Base class for all session adapter exceptions."""


class AdapterConfigurationError(SessionAdapterError, ValueError):
    """Raised when the adapter is constructed without a required collaborator."""

    def __init__(self, detail: str, field: str) -> None:
        """Initialize with the name of the offending configuration field."""
        super().__init__(detail)
        self.detail = detail
        self.field = field
