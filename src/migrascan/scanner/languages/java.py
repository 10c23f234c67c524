"""Java patterns."""

from __future__ import annotations

from migrascan.scanner.languages.generic import generic_patterns, pattern
from migrascan.scanner.models import ExtractionKind as K
from migrascan.scanner.models import ScanMode

LANGUAGE = "java"
EXTENSIONS = (".java",)

_TYPE = r"[\w<>\[\],.?]+"

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
            r"(?:@Converge|@CVG)(?:Endpoint|Service|Client)",
            K.FRAMEWORK_ANNOTATION,
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
            r"\.(?:processTransaction|processPayment|processRefund|processAuth)\s*\(",
            K.API_CALL,
            ignore_case=True,
            name="process_method_call",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"^\s*import\s+(?:static\s+)?[\w.]*(?:converge|cvg)[\w.*]*\s*;",
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
            r"\b(?:class|interface)\s+\w*(?:Converge|CVG|Payment|Transaction|Refund)\w*",
            K.CLASS_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            rf"\b(?:public|protected|private)\s+(?:static\s+)?(?:final\s+)?{_TYPE}\s+"
            r"\w*(?:process|create|submit|execute|refund|authorize|capture)\w*\s*\(",
            K.METHOD_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"@(?:RestController|Controller|Service|RequestMapping|GetMapping|PostMapping"
            r"|PutMapping|DeleteMapping|PatchMapping)\b(?:\s*\([^)]*\))?",
            K.FRAMEWORK_ANNOTATION,
            name="spring_annotation",
        ),
    ),
    ScanMode.SCHEMA: (
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\b(?:class|record|interface|enum)\s+[A-Z]\w*(?:DTO|Dto|Request|Response|Model|Entity)\b",
            K.DTO_DEFINITION,
        ),
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            rf"\bprivate\s+(?:final\s+)?{_TYPE}\s+"
            r"(?:ssl\w*|merchant\w*|amount|currency|transaction\w*|card\w*)\s*[;=]",
            K.PROPERTY_SIGNATURE,
            ignore_case=True,
        ),
    ),
}
