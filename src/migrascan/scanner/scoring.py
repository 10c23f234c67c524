"""Confidence scorer — additive, explainable heuristic ranking.

Every finding starts at ``BASE_CONFIDENCE``; each independent signal adds
its weight at most once, and the sum is capped at 1.0. The result is a
ranking aid, not a calibrated probability.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

BASE_CONFIDENCE = 0.5


@dataclass(frozen=True)
class Signal:
    """A named scoring signal and the weight it contributes."""

    name: str
    weight: float


CALL_SUFFIX = Signal("call-suffix", 0.3)
IMPORT_CONTEXT = Signal("import-context", 0.2)
CONFIG_REFERENCE = Signal("config-reference", 0.1)
VENDOR_CALL = Signal("vendor-call", 0.1)

_CALL_SUFFIX_RE = re.compile(r"(?:\.|->)(?:process|create|submit|execute)", re.IGNORECASE)
_IMPORT_LINE_RE = re.compile(
    r"^\s*(?:import|from|using|imports|include|include_once|require|require_once"
    r"|require_relative|use|#\s*include)\b"
    r"|\brequire\s*\(",
    re.IGNORECASE,
)
_CONFIG_RE = re.compile(r"config|key|secret|merchant", re.IGNORECASE)

_VENDOR_DOT = re.compile(r"(?:converge|cvg)\.", re.IGNORECASE)
_VENDOR_CALL_RE: dict[str, re.Pattern[str]] = {
    "javascript": _VENDOR_DOT,
    "java": _VENDOR_DOT,
    "csharp": _VENDOR_DOT,
    "python": _VENDOR_DOT,
    "ruby": _VENDOR_DOT,
    "vb": _VENDOR_DOT,
    "php": re.compile(r"(?:converge|cvg)->", re.IGNORECASE),
}


def explain(matched_text: str, line: str, language: str) -> list[Signal]:
    """Return the signals that fire for a match, in fixed order."""
    fired: list[Signal] = []
    if _CALL_SUFFIX_RE.search(matched_text):
        fired.append(CALL_SUFFIX)
    if _IMPORT_LINE_RE.search(line):
        fired.append(IMPORT_CONTEXT)
    if _CONFIG_RE.search(matched_text):
        fired.append(CONFIG_REFERENCE)
    vendor = _VENDOR_CALL_RE.get(language)
    if vendor is not None and vendor.search(matched_text):
        fired.append(VENDOR_CALL)
    return fired


def score(matched_text: str, line: str, language: str) -> float:
    """Score a match in [0, 1]."""
    total = BASE_CONFIDENCE + sum(s.weight for s in explain(matched_text, line, language))
    return max(0.0, min(round(total, 4), 1.0))
