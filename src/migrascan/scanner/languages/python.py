"""Python patterns."""

from __future__ import annotations

from migrascan.scanner.languages.generic import generic_patterns, pattern
from migrascan.scanner.models import ExtractionKind as K
from migrascan.scanner.models import ScanMode

LANGUAGE = "python"
EXTENSIONS = (".py",)

PATTERNS = {
    ScanMode.PATTERN: (
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"(?:converge|cvg)\.(?:transaction|payment|refund|auth)\.(?:create|process|submit|execute)",
            K.API_CALL,
            ignore_case=True,
            name="vendor_resource_call",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"(?:from|import)\s+(?:converge|cvg)",
            K.IMPORT,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"(?:Converge|CVG)(?:Client|Service|API|Transaction|Payment)",
            K.API_CALL,
            name="vendor_type_reference",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"\.(?:process_transaction|process_payment|process_refund|process_auth)\s*\(",
            K.API_CALL,
            ignore_case=True,
            name="process_method_call",
        ),
    )
    + generic_patterns(LANGUAGE),
    ScanMode.STRUCTURAL: (
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\bclass\s+\w*(?:Converge|Cvg|Payment|Transaction|Refund)\w*",
            K.CLASS_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\b(?:async\s+)?def\s+\w*(?:process|create|submit|execute|refund|authorize|capture)\w*\s*\(",
            K.METHOD_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"@(?:app|router|bp|blueprint|api)\.(?:route|get|post|put|delete|patch)\s*\(",
            K.FRAMEWORK_ANNOTATION,
            ignore_case=True,
            name="route_decorator",
        ),
    ),
    ScanMode.SCHEMA: (
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\bclass\s+[A-Z]\w*(?:Request|Response|Dto|DTO|Model|Schema|Payload)\b",
            K.DTO_DEFINITION,
        ),
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\bclass\s+[A-Z]\w*\s*\((?:[\w.]+\s*,\s*)*[\w.]*(?:BaseModel|Schema|TypedDict|Serializer)\b",
            K.DTO_DEFINITION,
            name="model_base_class",
        ),
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"^\s+(?:ssl_\w+|merchant_id|amount|currency|transaction_id|card_number|exp_date|cvv2?)\s*:\s*\S",
            K.PROPERTY_SIGNATURE,
            ignore_case=True,
            repeatable=False,
        ),
    ),
}
