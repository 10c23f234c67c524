"""Pattern library — immutable (language, mode) → ordered pattern registry."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

import yaml

from migrascan.scanner.errors import PatternFileError
from migrascan.scanner.languages import LANGUAGE_MODULES
from migrascan.scanner.languages.generic import pattern
from migrascan.scanner.models import ExtractionKind, PatternEntry, ScanMode

logger = logging.getLogger(__name__)


class PatternLibrary:
    """Ordered pattern sets keyed by (language, mode). Read-only once built."""

    def __init__(self, entries: Iterable[PatternEntry]) -> None:
        table: dict[tuple[str, ScanMode], list[PatternEntry]] = {}
        for entry in entries:
            table.setdefault((entry.language, entry.mode), []).append(entry)
        self._table = MappingProxyType(
            {key: tuple(value) for key, value in table.items()}
        )

    @classmethod
    def default(cls) -> PatternLibrary:
        """The built-in library for every supported language."""
        return _DEFAULT_LIBRARY

    def patterns_for(self, language: str, mode: ScanMode) -> tuple[PatternEntry, ...]:
        """Return patterns in declaration order; unknown pairs yield ()."""
        return self._table.get((language, mode), ())

    def extended(self, entries: Iterable[PatternEntry]) -> PatternLibrary:
        """Return a new library with *entries* appended after the existing ones."""
        return PatternLibrary([*self.entries(), *entries])

    def entries(self) -> list[PatternEntry]:
        return [e for group in self._table.values() for e in group]

    @property
    def languages(self) -> list[str]:
        return sorted({language for language, _ in self._table})

    def __len__(self) -> int:
        return sum(len(group) for group in self._table.values())


def _build_default() -> PatternLibrary:
    entries: list[PatternEntry] = []
    for module in LANGUAGE_MODULES:
        for mode in ScanMode:
            entries.extend(module.PATTERNS.get(mode, ()))
    return PatternLibrary(entries)


_DEFAULT_LIBRARY = _build_default()


def load_pattern_file(path: str | Path) -> list[PatternEntry]:
    """Load custom patterns from a YAML file.

    The file holds a list of mappings (or a mapping with a ``patterns`` list)::

        - language: javascript
          mode: pattern
          regex: "legacyGateway\\.charge\\("
          kind: api-call
          repeatable: true
          ignore_case: false
    """
    text = Path(path).read_text(encoding="utf-8")
    return load_patterns_from_string(text, source=str(path))


def load_patterns_from_string(text: str, source: str = "<string>") -> list[PatternEntry]:
    """Parse a YAML document into PatternEntry objects."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise PatternFileError(f"{source}: invalid YAML: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("patterns", [])
    if not isinstance(data, list):
        raise PatternFileError(f"{source}: expected a list of patterns")

    entries: list[PatternEntry] = []
    for index, raw in enumerate(data, start=1):
        entries.append(_parse_entry(raw, f"{source}#{index}"))
    logger.debug("Loaded %d custom patterns from %s", len(entries), source)
    return entries


def _parse_entry(raw: object, where: str) -> PatternEntry:
    if not isinstance(raw, dict):
        raise PatternFileError(f"{where}: pattern entry must be a mapping")
    for key in ("language", "regex", "kind"):
        if key not in raw:
            raise PatternFileError(f"{where}: missing '{key}'")

    try:
        mode = ScanMode(raw.get("mode", ScanMode.PATTERN.value))
        kind = ExtractionKind(raw["kind"])
    except ValueError as e:
        raise PatternFileError(f"{where}: {e}") from e

    try:
        return pattern(
            str(raw["language"]),
            mode,
            str(raw["regex"]),
            kind,
            ignore_case=bool(raw.get("ignore_case", False)),
            repeatable=bool(raw.get("repeatable", True)),
            name=str(raw.get("name", "")),
        )
    except re.error as e:
        raise PatternFileError(f"{where}: invalid regex: {e}") from e
