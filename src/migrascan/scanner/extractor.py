"""Match extractor — applies one pattern to file content line by line."""

from __future__ import annotations

import re

from migrascan.scanner.errors import PatternExecutionError
from migrascan.scanner.models import PatternEntry, RawMatch

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(content: str) -> list[str]:
    """Split on line terminators; ``\\r\\n`` counts as one terminator."""
    return _LINE_BREAK.split(content)


def build_snippet(lines: list[str], index: int) -> str:
    """Return the line at *index* with one line of context on each side."""
    start = max(0, index - 1)
    end = min(len(lines) - 1, index + 1)
    return "\n".join(lines[start : end + 1])


def extract(
    content: str,
    entry: PatternEntry,
    lines: list[str] | None = None,
) -> list[RawMatch]:
    """Return every located hit of *entry* in *content*.

    Repeatable patterns report all non-overlapping matches on a line;
    the rest report at most one per line. Pre-split *lines* may be
    passed to avoid re-splitting the same content for every pattern.
    """
    if lines is None:
        lines = split_lines(content)

    matches: list[RawMatch] = []
    try:
        for index, line in enumerate(lines):
            if not line:
                continue
            if entry.repeatable:
                hits = list(entry.regex.finditer(line))
            else:
                first = entry.regex.search(line)
                hits = [first] if first else []

            for m in hits:
                matches.append(
                    RawMatch(
                        line=index + 1,
                        column=m.start() + 1,
                        matched_text=m.group(0),
                        line_text=line,
                        snippet=build_snippet(lines, index),
                    )
                )
    except re.error as e:
        raise PatternExecutionError(
            f"Pattern '{entry.name}' failed: {e}"
        ) from e

    return matches
