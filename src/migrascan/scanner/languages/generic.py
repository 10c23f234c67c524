"""Patterns shared by every language, plus the helper used to declare them."""

from __future__ import annotations

import re

from migrascan.scanner.models import ExtractionKind, PatternEntry, ScanMode

# Hosts of the legacy gateway (production, UAT and demo environments)
VENDOR_URL = (
    r"https?://[\w.-]*(?:converge|elavon|cvg)[\w.-]*"
    r"(?::\d+)?(?:/[^\s'\"`<>)\]]*)?"
)

# Request fields of the legacy dialect's form-post API
VENDOR_FIELDS = r"\bssl_(?:merchant_id|user_id|pin|transaction_type|amount|card_number|exp_date)\b"


def pattern(
    language: str,
    mode: ScanMode,
    regex: str,
    kind: ExtractionKind,
    *,
    ignore_case: bool = False,
    repeatable: bool = True,
    name: str = "",
) -> PatternEntry:
    """Compile *regex* into a PatternEntry."""
    flags = re.IGNORECASE if ignore_case else 0
    return PatternEntry(
        language=language,
        mode=mode,
        regex=re.compile(regex, flags),
        kind=kind,
        repeatable=repeatable,
        name=name or kind.value,
    )


def generic_patterns(language: str) -> tuple[PatternEntry, ...]:
    """Pattern-mode entries that apply regardless of language."""
    return (
        pattern(
            language,
            ScanMode.PATTERN,
            VENDOR_URL,
            ExtractionKind.ENDPOINT_URL,
            ignore_case=True,
            name="vendor_url",
        ),
        pattern(
            language,
            ScanMode.PATTERN,
            VENDOR_FIELDS,
            ExtractionKind.CONFIGURATION,
            ignore_case=True,
            name="vendor_request_field",
        ),
    )
