from __future__ import annotations

from pathlib import Path


class RetentionError(Exception):
    """Base error for log location and retention."""


class InvalidConfiguration(RetentionError, ValueError):
    """Retention limit or log context is unusable."""


class DirectoryUnavailable(RetentionError):
    """The log directory cannot be created or read."""

    def __init__(self, directory: Path, reason: str):
        super().__init__(f"Log directory unavailable: {directory} ({reason})")
        self.directory = directory
        self.reason = reason


class DeletionFailed(RetentionError):
    """
    A single log file could not be removed.
    Collected into CleanResult.failures, never raised by clean().
    """

    def __init__(self, path: Path, reason: str, *, missing: bool = False):
        super().__init__(f"Could not delete {path}: {reason}")
        self.path = path
        self.reason = reason
        self.missing = missing
