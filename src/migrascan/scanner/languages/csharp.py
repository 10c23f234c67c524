"""C# patterns."""

from __future__ import annotations

from migrascan.scanner.languages.generic import generic_patterns, pattern
from migrascan.scanner.models import ExtractionKind as K
from migrascan.scanner.models import ScanMode

LANGUAGE = "csharp"
EXTENSIONS = (".cs",)

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
            r"(?:converge|cvg)\.(?:Transaction|Payment|Refund|Auth)\.(?:Create|Process|Submit|Execute)",
            K.API_CALL,
            ignore_case=True,
            name="vendor_resource_call",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"\[(?:Converge|CVG)(?:Endpoint|Service|Client)\]",
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
            r"\.(?:ProcessTransaction|ProcessPayment|ProcessRefund|ProcessAuth)\s*\(",
            K.API_CALL,
            ignore_case=True,
            name="process_method_call",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"^\s*using\s+[\w.]*(?:Converge|CVG)[\w.]*\s*;",
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
            r"\b(?:public|protected|private|internal)\s+(?:(?:static|async|virtual|override)\s+)*"
            rf"{_TYPE}\s+\w*(?:Process|Create|Submit|Execute|Refund|Authorize|Capture)\w*\s*\(",
            K.METHOD_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\[(?:ApiController|Route|HttpGet|HttpPost|HttpPut|HttpDelete|HttpPatch)\b[^\]]*\]",
            K.FRAMEWORK_ANNOTATION,
            name="aspnet_attribute",
        ),
    ),
    ScanMode.SCHEMA: (
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\b(?:class|record|struct|interface)\s+[A-Z]\w*(?:Dto|DTO|Request|Response|Model)\b",
            K.DTO_DEFINITION,
        ),
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            rf"\bpublic\s+{_TYPE}\s+"
            r"(?:Ssl\w*|Merchant\w*|Amount|Currency|Transaction\w*|Card\w*)\s*\{\s*get;",
            K.PROPERTY_SIGNATURE,
            ignore_case=True,
        ),
    ),
}
