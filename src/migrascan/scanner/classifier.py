"""Classifier — endpoint-type taxonomy and mode-specific field extraction."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from migrascan.scanner.models import (
    BusinessLogicType,
    EndpointType,
    RawMatch,
    ScanMode,
)


def _contains(*needles: str) -> Callable[[str], bool]:
    return lambda text: any(n in text for n in needles)


# First hit wins; evaluated on the lower-cased matched text.
ENDPOINT_RULES: tuple[tuple[Callable[[str], bool], EndpointType], ...] = (
    (_contains("transaction"), EndpointType.TRANSACTION),
    (_contains("payment"), EndpointType.PAYMENT),
    (_contains("refund"), EndpointType.REFUND),
    (_contains("auth"), EndpointType.AUTH),
    (_contains("dto", "model", "request", "response"), EndpointType.DTO),
    (_contains("http", "endpoint", "url"), EndpointType.ENDPOINT),
    (_contains("class", "service", "controller"), EndpointType.CLASS),
)

_URL_RE = re.compile(r"https?://[^\s'\"`<>)\]]+")
_CLASS_NAME_RE = re.compile(
    r"\b(?:class|interface|struct|module|record)\s+([A-Za-z_$][\w$]*)",
    re.IGNORECASE,
)
_METHOD_NAME_RE = re.compile(
    r"\b(?:function|def|func|sub)\s+\*?\s*(?:self\.)?([A-Za-z_$][\w$]*)"
    r"|\b(?:public|private|protected|internal)\s+"
    r"(?:(?:static|async|virtual|override|final|abstract|synchronized)\s+)*"
    r"[\w<>\[\],.?]+\s+([A-Za-z_]\w*)\s*\("
    r"|^\s*(?:async\s+)?(?!(?:if|for|while|switch|catch|return|function|new)\b)"
    r"([A-Za-z_$][\w$]*)\s*\([^)]*\)\s*\{",
    re.IGNORECASE,
)
_ANNOTATION_RE = re.compile(r"@[A-Za-z_][\w.]*|^\s*\[[A-Za-z_]\w*")
_HTTP_VERB_RE = re.compile(
    r"(?:\b|http)(?:get|post|put|delete|patch)(?:mapping)?\b", re.IGNORECASE
)
_SCHEMA_NAME_RE = re.compile(
    r"\b(?:interface|type|class|record|struct|structure|enum)\s+([A-Za-z_]\w*)",
    re.IGNORECASE,
)


@dataclass
class Classification:
    """Endpoint type plus whichever structured fields could be extracted."""

    endpoint_type: EndpointType
    endpoint_url: str | None = None
    class_name: str | None = None
    method_name: str | None = None
    dto_name: str | None = None
    business_logic_type: BusinessLogicType | None = None


def classify_endpoint_type(matched_text: str) -> EndpointType:
    text = matched_text.lower()
    for predicate, category in ENDPOINT_RULES:
        if predicate(text):
            return category
    return EndpointType.UNKNOWN


def extract_url(text: str) -> str | None:
    m = _URL_RE.search(text)
    return m.group(0) if m else None


def _class_evidence(line: str, result: Classification) -> bool:
    m = _CLASS_NAME_RE.search(line)
    if not m:
        return False
    result.class_name = m.group(1)
    return True


def _method_evidence(line: str, result: Classification) -> bool:
    m = _METHOD_NAME_RE.search(line)
    if not m:
        return False
    result.method_name = next(g for g in m.groups() if g)
    return True


def _endpoint_evidence(line: str, result: Classification) -> bool:
    return bool(_ANNOTATION_RE.search(line) and _HTTP_VERB_RE.search(line))


# Structural evidence in ascending strength: every check runs, the last one
# that fires decides business_logic_type.
STRUCTURAL_RULES: tuple[
    tuple[Callable[[str, Classification], bool], BusinessLogicType], ...
] = (
    (_class_evidence, BusinessLogicType.SERVICE_CLASS),
    (_method_evidence, BusinessLogicType.API_CALL),
    (_endpoint_evidence, BusinessLogicType.ENDPOINT_DEFINITION),
)


def classify(raw: RawMatch, mode: ScanMode) -> Classification:
    """Classify a raw match and pull mode-specific fields out of it.

    Pattern mode reads the matched text; the heuristic modes read the
    whole containing line, since a structural match rarely spans the
    names it is evidence for.
    """
    result = Classification(endpoint_type=classify_endpoint_type(raw.matched_text))

    if mode is ScanMode.PATTERN:
        result.endpoint_url = extract_url(raw.matched_text)

    elif mode is ScanMode.STRUCTURAL:
        line = raw.line_text or raw.matched_text
        for check, logic_type in STRUCTURAL_RULES:
            if check(line, result):
                result.business_logic_type = logic_type

    elif mode is ScanMode.SCHEMA:
        line = raw.line_text or raw.matched_text
        m = _SCHEMA_NAME_RE.search(line)
        if m:
            result.dto_name = m.group(1)
            result.business_logic_type = BusinessLogicType.DATA_MODEL

    return result


# (language, content marker, framework); first marker found wins per language
_FRAMEWORK_MARKERS: tuple[tuple[str, str, str], ...] = (
    ("javascript", "react", "React"),
    ("javascript", "angular", "Angular"),
    ("javascript", "vue", "Vue"),
    ("javascript", "express", "Express"),
    ("javascript", "next", "Next.js"),
    ("java", "springframework", "Spring"),
    ("java", "javax.servlet", "Servlet"),
    ("csharp", "Microsoft.AspNetCore", "ASP.NET Core"),
    ("csharp", "System.Web", "ASP.NET"),
    ("python", "django", "Django"),
    ("python", "flask", "Flask"),
    ("python", "fastapi", "FastAPI"),
    ("php", "Illuminate\\", "Laravel"),
    ("ruby", "Rails", "Rails"),
)


def detect_framework(content: str, language: str) -> str | None:
    """Guess the application framework of a file from content markers."""
    for lang, marker, framework in _FRAMEWORK_MARKERS:
        if lang == language and marker in content:
            return framework
    return None
