"""JavaScript/TypeScript patterns."""

from __future__ import annotations

from migrascan.scanner.languages.generic import generic_patterns, pattern
from migrascan.scanner.models import ExtractionKind as K
from migrascan.scanner.models import ScanMode

LANGUAGE = "javascript"
EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".mjs")


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
            r"(?:converge|cvg)\.api\.(?:post|get|put|delete)\s*\(",
            K.API_CALL,
            ignore_case=True,
            name="vendor_http_call",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"(?:converge|cvg)\.endpoint\s*[=:]\s*['\"`]([^'\"`]+)['\"`]",
            K.ENDPOINT_URL,
            ignore_case=True,
            name="vendor_endpoint_setting",
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"(?:converge|cvg)\.config\s*[=:]",
            K.CONFIGURATION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"(?:converge|cvg)\.merchantId\s*[=:]",
            K.CONFIGURATION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.PATTERN,
            r"(?:converge|cvg)\.apiKey\s*[=:]",
            K.CONFIGURATION,
            ignore_case=True,
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
            r"(?:import|require)\s*.*(?:converge|cvg)",
            K.IMPORT,
            ignore_case=True,
        ),
    )
    + generic_patterns(LANGUAGE),
    ScanMode.STRUCTURAL: (
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\bclass\s+[A-Za-z_$][\w$]*(?:Converge|Cvg|Payment|Transaction|Refund|Checkout)[\w$]*",
            K.CLASS_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\b(?:async\s+)?function\s*\*?\s*[\w$]*(?:process|create|submit|execute|refund|authorize|capture)[\w$]*\s*\(",
            K.METHOD_DEFINITION,
            ignore_case=True,
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"^\s*(?:async\s+)?(?:process|submit|execute|refund|authorize|capture)\w*\s*\([^)]*\)\s*\{",
            K.METHOD_DEFINITION,
            ignore_case=True,
            repeatable=False,
            name="class_method",
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"@(?:Controller|Get|Post|Put|Delete|Patch)\s*\([^)]*\)",
            K.FRAMEWORK_ANNOTATION,
            name="nest_decorator",
        ),
        pattern(
            LANGUAGE,
            ScanMode.STRUCTURAL,
            r"\b(?:app|router)\.(?:get|post|put|delete|patch)\s*\(\s*['\"`][^'\"`]*(?:pay|transaction|refund|checkout)",
            K.FRAMEWORK_ANNOTATION,
            ignore_case=True,
            name="express_route",
        ),
    ),
    ScanMode.SCHEMA: (
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"\b(?:interface|type|class)\s+[A-Z][\w$]*(?:Request|Response|Dto|DTO|Payload|Model|Transaction|Payment)\b",
            K.DTO_DEFINITION,
        ),
        pattern(
            LANGUAGE,
            ScanMode.SCHEMA,
            r"^\s*(?:readonly\s+)?(?:ssl_\w+|merchant_?id|amount|currency|transaction_?id|card_?number|exp_?date|cvv2?)\??\s*:",
            K.PROPERTY_SIGNATURE,
            ignore_case=True,
            repeatable=False,
        ),
    ),
}
