"""Scanner data models — scan options, findings, progress, and pattern entries."""

from __future__ import annotations

import enum
import re
import time
import uuid
from dataclasses import asdict, dataclass, field, replace


class ScanMode(enum.Enum):
    """How file content is interpreted during a scan."""

    PATTERN = "pattern"
    STRUCTURAL = "structural"
    SCHEMA = "schema"


class ExtractionKind(enum.Enum):
    """What a pattern is meant to pick out of a line."""

    ENDPOINT_URL = "endpoint-url"
    API_CALL = "api-call"
    CONFIGURATION = "configuration"
    IMPORT = "import"
    CLASS_DEFINITION = "class-definition"
    METHOD_DEFINITION = "method-definition"
    FRAMEWORK_ANNOTATION = "framework-annotation"
    DTO_DEFINITION = "dto-definition"
    PROPERTY_SIGNATURE = "property-signature"


class EndpointType(enum.Enum):
    """Coarse classification of a finding."""

    TRANSACTION = "transaction"
    PAYMENT = "payment"
    REFUND = "refund"
    AUTH = "auth"
    DTO = "dto"
    ENDPOINT = "endpoint"
    CLASS = "class"
    UNKNOWN = "unknown"


class BusinessLogicType(enum.Enum):
    """Finer classification used by the heuristic modes."""

    SERVICE_CLASS = "service-class"
    API_CALL = "api-call"
    ENDPOINT_DEFINITION = "endpoint-definition"
    DATA_MODEL = "data-model"


@dataclass(frozen=True)
class PatternEntry:
    """A compiled detection pattern bound to one language and scan mode.

    ``repeatable`` patterns report every non-overlapping match on a line,
    the others stop after the first hit.
    """

    language: str
    mode: ScanMode
    regex: re.Pattern[str]
    kind: ExtractionKind
    repeatable: bool = True
    name: str = ""


@dataclass(frozen=True)
class ScanOptions:
    """Caller-supplied parameters for one scan run."""

    mode: ScanMode = ScanMode.PATTERN
    languages: frozenset[str] = frozenset()
    include_globs: tuple[str, ...] = ()
    exclude_globs: tuple[str, ...] = ()


@dataclass(frozen=True)
class RawMatch:
    """A located pattern hit, before scoring and classification."""

    line: int
    column: int
    matched_text: str
    line_text: str = ""
    snippet: str = ""


@dataclass(frozen=True)
class Finding:
    """A located, classified, confidence-scored match in a source file."""

    file_path: str
    line: int
    column: int
    snippet: str
    matched_text: str
    confidence: float
    endpoint_type: EndpointType
    language: str
    scan_mode: ScanMode
    framework: str | None = None
    class_name: str | None = None
    method_name: str | None = None
    endpoint_url: str | None = None
    dto_name: str | None = None
    business_logic_type: BusinessLogicType | None = None
    created_at: float = field(default_factory=time.time)
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    def to_dict(self) -> dict:
        data = asdict(self)
        data["endpoint_type"] = self.endpoint_type.value
        data["scan_mode"] = self.scan_mode.value
        if self.business_logic_type is not None:
            data["business_logic_type"] = self.business_logic_type.value
        return data


@dataclass
class ScanProgress:
    """Live progress of a scan session, mutated once per file."""

    total_files: int = 0
    processed_files: int = 0
    current_file: str = ""
    percentage: int = 0
    estimated_seconds_remaining: int = 0
    is_complete: bool = False
    is_cancelled: bool = False

    def snapshot(self) -> ScanProgress:
        """Return an independent copy safe to hand to observers."""
        return replace(self)
