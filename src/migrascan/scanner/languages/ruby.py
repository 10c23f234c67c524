"""Ruby patterns."""

from __future__ import annotations

from migrascan.scanner.languages.generic import generic_patterns, pattern
from migrascan.scanner.models import ExtractionKind as K
from migrascan.scanner.models import ScanMode

LANGUAGE = "ruby"
EXTENSIONS = (".rb",)

PATTERNS = {
    ScanMode.PATTERN: (
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
            r"(?:converge|cvg)\.(?:transaction|payment|refund|auth)\.(?:create|process|submit|execute)",
            K.API_CALL,
            ignore_case=True,
            name="vendor_resource_call",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"(?:Converge|CVG)(?:Client|Service|API)\.new",
            K.API_CALL,
            name="vendor_client_construction",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"\.(?:process_transaction|process_payment|process_refund|process_auth)\s*\(",
            K.API_CALL,
            ignore_case=True,
            name="process_method_call",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"^\s*require(?:_relative)?\s+['\"][^'\"]*(?:converge|cvg)",
            K.IMPORT,
            ignore_case=True,
            repeatable=False,
        ),
    )
    + generic_patterns(LANGUAGE),
    ScanMode.STRUCTURAL: (
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\b(?:class|module)\s+\w*(?:Converge|Cvg|Payment|Transaction|Refund)\w*",
            K.CLASS_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\bdef\s+(?:self\.)?\w*(?:process|create|submit|execute|refund|authorize|capture)\w*",
            K.METHOD_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"^\s*(?:get|post|put|patch|delete)\s+['\"][^'\"]*(?:pay|transaction|refund|checkout)",
            K.FRAMEWORK_ANNOTATION,
            ignore_case=True,
            repeatable=False,
            name="rails_route",
        ),
    ),
    ScanMode.SCHEMA: (
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\bclass\s+[A-Z]\w*(?:Request|Response|Dto|Model|Serializer)\b",
            K.DTO_DEFINITION,
        ),
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\battr_(?:accessor|reader|writer)\s+:(?:ssl_\w+|merchant\w*|amount|currency|transaction\w*|card\w*)",
            K.PROPERTY_SIGNATURE,
            ignore_case=True,
        ),
    ),
}
