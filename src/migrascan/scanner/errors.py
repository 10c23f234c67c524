"""Scanner error taxonomy."""

from __future__ import annotations


class ScanError(Exception):
    """Base class for scanner errors."""


class SessionConflictError(ScanError):
    """Raised when a scan is started while another one is running."""


class EnumerationError(ScanError):
    """Raised when the set of files to scan cannot be resolved."""


class FileAccessError(ScanError):
    """Raised when a single file cannot be read. Recovered per file."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class PatternExecutionError(ScanError):
    """Raised when applying a pattern to file content fails."""


class PatternFileError(ScanError):
    """Raised when a custom pattern file is malformed."""
