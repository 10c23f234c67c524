"""Ignore list — ordered, deduplicated path-exclusion globs."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.git/**",
    "**/coverage/**",
    "**/*.min.js",
    "**/*.bundle.js",
)


class IgnoreList:
    """Exclusion globs applied to every scan. Only ever grows."""

    def __init__(self, patterns: tuple[str, ...] | list[str] = DEFAULT_IGNORE_PATTERNS) -> None:
        self._patterns: list[str] = []
        self._lock = threading.Lock()
        for p in patterns:
            self.add(p)

    def add(self, pattern: str) -> bool:
        """Append *pattern* unless already present. Returns True if added."""
        with self._lock:
            if pattern in self._patterns:
                return False
            self._patterns.append(pattern)
        logger.debug("Added to ignore list: %s", pattern)
        return True

    def patterns(self) -> list[str]:
        """Return a copy of the current globs in insertion order."""
        with self._lock:
            return list(self._patterns)

    def __contains__(self, pattern: object) -> bool:
        with self._lock:
            return pattern in self._patterns

    def __len__(self) -> int:
        with self._lock:
            return len(self._patterns)
