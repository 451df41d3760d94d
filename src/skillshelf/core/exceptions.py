"""Custom exceptions for skillshelf."""

from pathlib import Path


class ManifestError(Exception):
    """Raised when a marketplace manifest operation can't be applied."""


class ManifestNotFoundError(ManifestError):
    """Raised when the marketplace manifest file doesn't exist."""

    def __init__(self, path: Path):
        super().__init__(f"Marketplace manifest not found: {path}")
        self.path = path


class InvalidManifestError(ManifestError):
    """Raised when the marketplace manifest is malformed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid marketplace manifest '{path}': {reason}")
        self.path = path
        self.reason = reason
