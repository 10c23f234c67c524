"""PHP patterns."""

from __future__ import annotations

from migrascan.scanner.languages.generic import generic_patterns, pattern
from migrascan.scanner.models import ExtractionKind as K
from migrascan.scanner.models import ScanMode

LANGUAGE = "php"
EXTENSIONS = (".php",)

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
            r"(?:converge|cvg)->(?:transaction|payment|refund|auth)->(?:create|process|submit|execute)",
            K.API_CALL,
            ignore_case=True,
            name="vendor_resource_call",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"new\s+(?:Converge|CVG)(?:Client|Service|API)",
            K.API_CALL,
            name="vendor_client_construction",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"->(?:processTransaction|processPayment|processRefund|processAuth)\s*\(",
            K.API_CALL,
            ignore_case=True,
            name="process_method_call",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"^\s*(?:use\s+[\w\\]*(?:Converge|CVG)|(?:require|include)(?:_once)?\s*\(?\s*['\"][^'\"]*(?:converge|cvg))",
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
            r"\bclass\s+\w*(?:Converge|Cvg|Payment|Transaction|Refund)\w*",
            K.CLASS_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\b(?:(?:public|protected|private|static)\s+)*function\s+\w*(?:process|create|submit|execute|refund|authorize|capture)\w*\s*\(",
            K.METHOD_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"(?:#\[Route|@Route)\s*\([^)]*\)",
            K.FRAMEWORK_ANNOTATION,
            name="route_attribute",
        ),
    ),
    ScanMode.SCHEMA: (
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\b(?:class|interface)\s+[A-Z]\w*(?:Request|Response|Dto|DTO|Model)\b",
            K.DTO_DEFINITION,
        ),
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\b(?:public|protected|private)\s+(?:\??[\w\\]+\s+)?\$(?:ssl_\w+|merchant\w*|amount|currency|transaction\w*|card\w*)\b",
            K.PROPERTY_SIGNATURE,
            ignore_case=True,
        ),
    ),
}
