"""Workspace collaborators — file enumeration, reading, language detection."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

import pathspec

from migrascan.scanner.errors import EnumerationError, FileAccessError
from migrascan.scanner.languages import LANGUAGE_EXTENSIONS

logger = logging.getLogger(__name__)

# Directories never worth descending into
_SKIP_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".tox",
    ".eggs",
}

DEFAULT_MAX_RESULTS = 10_000

# Max file size to scan (1 MB)
DEFAULT_MAX_FILE_SIZE = 1_048_576

_EXTENSION_TO_LANGUAGE = {
    ext: language
    for language, extensions in LANGUAGE_EXTENSIONS.items()
    for ext in extensions
}


def detect_language(path: str) -> str | None:
    """Map a file path to a language id by extension."""
    return _EXTENSION_TO_LANGUAGE.get(Path(path).suffix.lower())


@runtime_checkable
class Workspace(Protocol):
    """Protocol for the file source a scan runs against."""

    def enumerate_files(
        self, include_globs: list[str], exclude_globs: list[str]
    ) -> list[str]:
        """Return paths matching any include glob and no exclude glob."""
        ...

    def read_text_file(self, path: str) -> str:
        """Return file content; raises FileAccessError when unreadable."""
        ...

    def detect_language(self, path: str) -> str | None:
        """Return the language id for *path*, or None."""
        ...


class LocalWorkspace:
    """Workspace backed by a directory on the local filesystem.

    Paths handed out and accepted are POSIX-style and relative to *root*.
    """

    def __init__(
        self,
        root: str | Path,
        max_results: int = DEFAULT_MAX_RESULTS,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> None:
        self.root = Path(root).resolve()
        self.max_results = max_results
        self.max_file_size = max_file_size

    def enumerate_files(
        self, include_globs: list[str], exclude_globs: list[str]
    ) -> list[str]:
        if not self.root.is_dir():
            raise EnumerationError(f"Scan root is not a directory: {self.root}")

        include = pathspec.PathSpec.from_lines(
            pathspec.patterns.GitWildMatchPattern, include_globs
        )
        exclude = pathspec.PathSpec.from_lines(
            pathspec.patterns.GitWildMatchPattern, exclude_globs
        )

        found: list[str] = []
        for dirpath, dirs, files in os.walk(self.root):
            dirs[:] = sorted(d for d in dirs if d not in _SKIP_DIRS)
            rel_dir = Path(dirpath).relative_to(self.root)

            for name in sorted(files):
                rel = (rel_dir / name).as_posix()
                if not include.match_file(rel) or exclude.match_file(rel):
                    continue
                try:
                    if (Path(dirpath) / name).stat().st_size > self.max_file_size:
                        logger.debug("Skipping oversized file %s", rel)
                        continue
                except OSError:
                    continue
                found.append(rel)
                if len(found) >= self.max_results:
                    logger.warning(
                        "File limit of %d reached; remaining files not scanned",
                        self.max_results,
                    )
                    return found
        return found

    def read_text_file(self, path: str) -> str:
        try:
            return (self.root / path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(path, str(e)) from e

    def detect_language(self, path: str) -> str | None:
        return detect_language(path)
