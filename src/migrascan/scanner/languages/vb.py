"""VB.NET patterns."""

from __future__ import annotations

from migrascan.scanner.languages.generic import generic_patterns, pattern
from migrascan.scanner.models import ExtractionKind as K
from migrascan.scanner.models import ScanMode

LANGUAGE = "vb"
EXTENSIONS = (".vb",)

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
            r"New\s+(?:Converge|CVG)(?:Client|Service|API)",
            K.API_CALL,
            ignore_case=True,
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
            r"^\s*Imports\s+[\w.]*(?:Converge|CVG)",
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
            r"\b(?:Class|Module|Interface)\s+\w*(?:Converge|CVG|Payment|Transaction|Refund)\w*",
            K.CLASS_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\b(?:(?:Public|Private|Protected|Friend|Shared|Async|Overrides)\s+)*(?:Function|Sub)\s+"
            r"\w*(?:Process|Create|Submit|Execute|Refund|Authorize|Capture)\w*\s*\(",
            K.METHOD_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"<(?:HttpGet|HttpPost|HttpPut|HttpDelete|Route)\b[^>]*>",
            K.FRAMEWORK_ANNOTATION,
            ignore_case=True,
            name="aspnet_attribute",
        ),
    ),
    ScanMode.SCHEMA: (
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\b(?:Class|Structure|Interface)\s+[A-Z]\w*(?:Dto|DTO|Request|Response|Model)\b",
            K.DTO_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\bPublic\s+Property\s+(?:Ssl\w*|Merchant\w*|Amount|Currency|Transaction\w*|Card\w*)\b",
            K.PROPERTY_SIGNATURE,
            ignore_case=True,
        ),
    ),
}
