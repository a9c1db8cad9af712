"""Gitor server exception classes."""

from pathlib import Path


class GitorError(Exception):
    """Base exception for all Gitor server errors."""


class ConfigError(GitorError):
    """Raised when the server configuration is missing or invalid."""


class OwnershipError(GitorError):
    """Raised when a created repository could not be handed to its owner.

    The repository itself exists on disk when this is raised.
    """

    def __init__(self, path: Path, owner: str, reason: str) -> None:
        self.path = path
        self.owner = owner
        self.reason = reason
        super().__init__(f"Could not chown {path} to {owner}: {reason}")
