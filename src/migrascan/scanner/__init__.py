"""Scanner — pattern library, extraction, scoring, classification, sessions."""

from migrascan.scanner.engine import CodeScanner, ScanState
from migrascan.scanner.errors import (
    EnumerationError,
    FileAccessError,
    PatternExecutionError,
    PatternFileError,
    ScanError,
    SessionConflictError,
)
from migrascan.scanner.models import (
    BusinessLogicType,
    EndpointType,
    ExtractionKind,
    Finding,
    PatternEntry,
    ScanMode,
    ScanOptions,
    ScanProgress,
)
from migrascan.scanner.patterns import PatternLibrary

__all__ = [
    "BusinessLogicType",
    "CodeScanner",
    "EndpointType",
    "EnumerationError",
    "ExtractionKind",
    "FileAccessError",
    "Finding",
    "PatternEntry",
    "PatternExecutionError",
    "PatternFileError",
    "PatternLibrary",
    "ScanError",
    "ScanMode",
    "ScanOptions",
    "ScanProgress",
    "ScanState",
    "SessionConflictError",
]
