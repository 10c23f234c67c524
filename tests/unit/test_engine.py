"""Tests for the scan session controller."""

from __future__ import annotations

import re
import threading

import pytest

from migrascan.scanner.engine import CodeScanner, ScanState
from migrascan.scanner.errors import EnumerationError, SessionConflictError
from migrascan.scanner.languages.generic import pattern
from migrascan.scanner.models import (
    BusinessLogicType,
    EndpointType,
    ExtractionKind,
    PatternEntry,
    ScanMode,
    ScanOptions,
    ScanProgress,
)
from migrascan.scanner.patterns import PatternLibrary


JS_OPTIONS = ScanOptions(mode=ScanMode.PATTERN, languages=frozenset({"javascript"}))


def _vendor_a_library() -> PatternLibrary:
    return PatternLibrary(
        [
            pattern(
                "javascript",
                ScanMode.PATTERN,
                r"https://pay\.vendor-a\.com[^'\"\s]*",
                ExtractionKind.ENDPOINT_URL,
                repeatable=True,
            )
        ]
    )


class TestScanProject:
    def test_zero_matches_returns_empty(self, make_workspace):
        workspace = make_workspace({"a.js": "const x = 1;\n", "b.py": "print('hi')\n"})
        scanner = CodeScanner(workspace)
        assert scanner.scan_project(JS_OPTIONS) == []
        assert scanner.get_scan_progress().is_complete

    def test_vendor_a_url_scenario(self, make_workspace):
        workspace = make_workspace(
            {"a.js": "const url = 'https://pay.vendor-a.com/api/tx';\n"}
        )
        scanner = CodeScanner(workspace, library=_vendor_a_library())
        findings = scanner.scan_project(JS_OPTIONS)

        assert len(findings) == 1
        finding = findings[0]
        assert finding.line == 1
        assert finding.column == 14
        assert finding.endpoint_type is EndpointType.ENDPOINT
        assert finding.endpoint_url == "https://pay.vendor-a.com/api/tx"
        assert finding.file_path == "a.js"
        assert finding.language == "javascript"
        assert finding.scan_mode is ScanMode.PATTERN

    def test_default_library_javascript(self, make_workspace):
        workspace = make_workspace(
            {
                "src/payment.js": (
                    "const converge = require('converge-api');\n"
                    "\n"
                    "function pay() {\n"
                    "  return converge.transaction.create({ amount: 50 });\n"
                    "}\n"
                )
            }
        )
        findings = CodeScanner(workspace).scan_project(JS_OPTIONS)

        tx = [f for f in findings if f.endpoint_type is EndpointType.TRANSACTION]
        assert len(tx) == 1
        assert tx[0].line == 4
        assert tx[0].matched_text == "converge.transaction.create"
        assert tx[0].confidence == pytest.approx(0.9)
        assert tx[0].snippet == "function pay() {\n  return converge.transaction.create({ amount: 50 });\n}"

        imports = [f for f in findings if f.line == 1]
        assert imports
        assert all(f.confidence >= 0.7 for f in imports)

    def test_java_structural_scan(self, make_workspace):
        workspace = make_workspace(
            {
                "PaymentController.java": (
                    "import org.springframework.web.bind.annotation.*;\n"
                    "@RestController\n"
                    "public class PaymentController {\n"
                    '    @PostMapping("/payments")\n'
                    "    public PaymentResponseDTO processPayment(PaymentRequestDTO req) {\n"
                    "        return null;\n"
                    "    }\n"
                    "}\n"
                )
            }
        )
        options = ScanOptions(mode=ScanMode.STRUCTURAL, languages=frozenset({"java"}))
        findings = CodeScanner(workspace).scan_project(options)

        by_line = {}
        for f in findings:
            by_line.setdefault(f.line, []).append(f)

        assert by_line[3][0].class_name == "PaymentController"
        assert by_line[3][0].business_logic_type is BusinessLogicType.SERVICE_CLASS
        assert by_line[4][0].business_logic_type is BusinessLogicType.ENDPOINT_DEFINITION
        assert by_line[5][0].method_name == "processPayment"
        assert by_line[5][0].business_logic_type is BusinessLogicType.API_CALL
        assert all(f.framework == "Spring" for f in findings)

    def test_structural_method_overrides_class(self, make_workspace):
        workspace = make_workspace(
            {
                "service.js": (
                    "// payments\n"
                    "class FooPaymentService { function processPayment() {} }\n"
                )
            }
        )
        options = ScanOptions(
            mode=ScanMode.STRUCTURAL, languages=frozenset({"javascript"})
        )
        findings = CodeScanner(workspace).scan_project(options)

        assert findings
        for finding in findings:
            assert finding.line == 2
            assert finding.business_logic_type is BusinessLogicType.API_CALL
        assert findings[0].class_name == "FooPaymentService"
        assert findings[0].method_name == "processPayment"

    def test_schema_scan(self, make_workspace):
        workspace = make_workspace(
            {
                "models.py": (
                    "from pydantic import BaseModel\n"
                    "class SaleRequest(BaseModel):\n"
                    "    ssl_amount: float\n"
                )
            }
        )
        options = ScanOptions(mode=ScanMode.SCHEMA, languages=frozenset({"python"}))
        findings = CodeScanner(workspace).scan_project(options)

        dto = [f for f in findings if f.dto_name]
        assert dto
        assert dto[0].dto_name == "SaleRequest"
        assert dto[0].business_logic_type is BusinessLogicType.DATA_MODEL
        assert any(f.line == 3 for f in findings)

    def test_findings_within_file_bounds(self, make_workspace):
        content = "converge.payment.create()\n\ncvg.refund.process(); cvg.auth.submit()"
        workspace = make_workspace({"x.js": content})
        lines = content.split("\n")
        for f in CodeScanner(workspace).scan_project(JS_OPTIONS):
            assert 1 <= f.line <= len(lines)
            assert 1 <= f.column <= len(lines[f.line - 1]) + 1
            assert 0.0 <= f.confidence <= 1.0

    def test_empty_library_is_respected(self, make_workspace):
        workspace = make_workspace({"a.js": "converge.payment.create()\n"})
        scanner = CodeScanner(workspace, library=PatternLibrary([]))
        assert scanner.scan_project(JS_OPTIONS) == []
        assert len(scanner.library) == 0

    def test_unknown_language_file_yields_nothing(self, make_workspace):
        workspace = make_workspace({"notes.txt": "converge.payment.create"})
        assert CodeScanner(workspace).scan_project(JS_OPTIONS) == []


class TestFileFailures:
    def test_unreadable_file_is_skipped(self, make_workspace):
        files = {f"f{i:03d}.js": "converge.payment.create()\n" for i in range(1, 101)}
        workspace = make_workspace(files, unreadable={"f050.js"})
        scanner = CodeScanner(workspace)

        findings = scanner.scan_project(JS_OPTIONS)

        paths = {f.file_path for f in findings}
        assert len(paths) == 99
        assert "f050.js" not in paths
        progress = scanner.get_scan_progress()
        assert progress.processed_files == 100
        assert progress.total_files == 100
        assert progress.is_complete
        assert not progress.is_cancelled
        assert progress.percentage == 100

    def test_failing_pattern_skips_only_that_pattern(self, make_workspace):
        class ExplodingRegex:
            pattern = "boom"

            def finditer(self, line):
                raise re.error("bad pattern")

        broken = PatternEntry(
            language="javascript",
            mode=ScanMode.PATTERN,
            regex=ExplodingRegex(),  # type: ignore[arg-type]
            kind=ExtractionKind.API_CALL,
            name="broken",
        )
        library = _vendor_a_library().extended([broken])
        workspace = make_workspace(
            {"a.js": "fetch('https://pay.vendor-a.com/x');\n"}
        )

        findings = CodeScanner(workspace, library=library).scan_project(JS_OPTIONS)

        assert [f.matched_text for f in findings] == ["https://pay.vendor-a.com/x"]

    def test_unexpected_error_skips_only_that_file(self, make_workspace):
        files = {f"f{i}.js": "converge.payment.create()\n" for i in range(3)}
        workspace = make_workspace(files)

        def disk_gone(path: str) -> None:
            if path == "f1.js":
                raise OSError("disk gone")

        workspace.on_read = disk_gone
        scanner = CodeScanner(workspace)

        findings = scanner.scan_project(JS_OPTIONS)

        assert {f.file_path for f in findings} == {"f0.js", "f2.js"}
        progress = scanner.get_scan_progress()
        assert progress.is_complete
        assert progress.processed_files == 3
        assert scanner.state is ScanState.IDLE

    def test_enumeration_error_returns_to_idle(self, make_workspace):
        workspace = make_workspace()

        def fail() -> None:
            raise EnumerationError("no workspace root")

        workspace.on_enumerate = fail
        scanner = CodeScanner(workspace)
        snapshots: list[ScanProgress] = []
        scanner.on_progress(snapshots.append)

        with pytest.raises(EnumerationError):
            scanner.scan_project(JS_OPTIONS)
        scanner.flush_progress()

        assert snapshots == []
        assert scanner.state is ScanState.IDLE


class TestGlobs:
    def test_include_and_exclude_globs(self, make_workspace):
        workspace = make_workspace()
        scanner = CodeScanner(workspace)
        options = ScanOptions(
            languages=frozenset({"javascript", "java"}),
            include_globs=("**/*.java", "legacy/**"),
            exclude_globs=("**/dist/**", "**/generated/**"),
        )
        scanner.scan_project(options)

        include, exclude = workspace.enumerate_calls[0]
        assert include == [
            "**/*.java",
            "**/*.js",
            "**/*.jsx",
            "**/*.ts",
            "**/*.tsx",
            "**/*.mjs",
            "legacy/**",
        ]
        assert exclude[: len(scanner.get_ignore_list())] == scanner.get_ignore_list()
        assert exclude.count("**/dist/**") == 1
        assert exclude[-1] == "**/generated/**"

    def test_ignore_list_changes_apply_to_next_scan(self, make_workspace):
        workspace = make_workspace()
        scanner = CodeScanner(workspace)
        scanner.scan_project(JS_OPTIONS)
        scanner.add_to_ignore_list("**/vendor/**")
        scanner.scan_project(JS_OPTIONS)

        assert "**/vendor/**" not in workspace.enumerate_calls[0][1]
        assert "**/vendor/**" in workspace.enumerate_calls[1][1]


class TestIgnoreList:
    def test_defaults_present(self, make_workspace):
        scanner = CodeScanner(make_workspace())
        assert "**/node_modules/**" in scanner.get_ignore_list()

    def test_add_is_idempotent(self, make_workspace):
        scanner = CodeScanner(make_workspace())
        scanner.add_to_ignore_list("**/legacy/**")
        scanner.add_to_ignore_list("**/legacy/**")
        assert scanner.get_ignore_list().count("**/legacy/**") == 1

    def test_returned_list_is_a_copy(self, make_workspace):
        scanner = CodeScanner(make_workspace())
        scanner.get_ignore_list().append("mutated")
        assert "mutated" not in scanner.get_ignore_list()


class TestCancellation:
    def test_cancel_before_first_file(self, make_workspace):
        workspace = make_workspace({"a.js": "converge.payment.create()\n"})
        scanner = CodeScanner(workspace)
        workspace.on_enumerate = scanner.cancel_scan

        findings = scanner.scan_project(JS_OPTIONS)

        assert findings == []
        progress = scanner.get_scan_progress()
        assert progress.is_cancelled
        assert not progress.is_complete
        assert progress.processed_files == 0
        assert progress.total_files == 1
        assert scanner.last_outcome is ScanState.CANCELLED
        assert scanner.state is ScanState.IDLE

    def test_cancel_mid_scan_finishes_current_file(self, make_workspace):
        files = {f"f{i}.js": "converge.payment.create()\n" for i in range(5)}
        workspace = make_workspace(files)
        scanner = CodeScanner(workspace)

        def cancel_on_third(path: str) -> None:
            if path == "f2.js":
                scanner.cancel_scan()

        workspace.on_read = cancel_on_third
        findings = scanner.scan_project(JS_OPTIONS)

        assert {f.file_path for f in findings} == {"f0.js", "f1.js", "f2.js"}
        progress = scanner.get_scan_progress()
        assert progress.is_cancelled
        assert progress.processed_files == 2

    def test_cancel_when_idle_is_noop(self, make_workspace):
        scanner = CodeScanner(make_workspace({"a.js": "converge.payment.create()\n"}))
        scanner.cancel_scan()
        scanner.cancel_scan()
        assert scanner.state is ScanState.IDLE
        assert len(scanner.scan_project(JS_OPTIONS)) > 0
        assert scanner.last_outcome is ScanState.COMPLETED

    def test_new_scan_after_cancel(self, make_workspace):
        workspace = make_workspace({"a.js": "converge.payment.create()\n"})
        scanner = CodeScanner(workspace)
        workspace.on_enumerate = scanner.cancel_scan
        scanner.scan_project(JS_OPTIONS)

        workspace.on_enumerate = None
        assert len(scanner.scan_project(JS_OPTIONS)) > 0
        assert scanner.get_scan_progress().is_complete


class TestSessionConflict:
    def test_second_scan_while_running_fails(self, make_workspace):
        workspace = make_workspace({"a.js": "converge.payment.create()\n"})
        scanner = CodeScanner(workspace)
        conflicts: list[Exception] = []

        def start_again() -> None:
            assert scanner.state is ScanState.RUNNING
            try:
                scanner.scan_project(JS_OPTIONS)
            except SessionConflictError as e:
                conflicts.append(e)

        workspace.on_enumerate = start_again
        findings = scanner.scan_project(JS_OPTIONS)

        assert len(conflicts) == 1
        assert findings
        workspace.on_enumerate = None
        assert scanner.scan_project(JS_OPTIONS)

    def test_conflict_from_another_thread(self, make_workspace):
        workspace = make_workspace({"a.js": "converge.payment.create()\n"})
        scanner = CodeScanner(workspace)
        entered = threading.Event()
        release = threading.Event()

        def block(path: str) -> None:
            entered.set()
            release.wait(timeout=5)

        workspace.on_read = block
        worker = threading.Thread(target=scanner.scan_project, args=(JS_OPTIONS,))
        worker.start()
        try:
            assert entered.wait(timeout=5)
            with pytest.raises(SessionConflictError):
                scanner.scan_project(JS_OPTIONS)
        finally:
            release.set()
            worker.join(timeout=5)
        assert scanner.state is ScanState.IDLE


class TestProgress:
    def test_progress_snapshots_are_monotonic(self, make_workspace):
        files = {f"f{i}.js": "x\n" for i in range(4)}
        scanner = CodeScanner(make_workspace(files))
        snapshots: list[ScanProgress] = []
        scanner.on_progress(snapshots.append)

        scanner.scan_project(JS_OPTIONS)
        scanner.flush_progress()

        assert [s.processed_files for s in snapshots] == [0, 1, 2, 3, 4]
        assert [s.percentage for s in snapshots] == [0, 25, 50, 75, 100]
        assert [s.current_file for s in snapshots[:-1]] == list(files)
        assert snapshots[-1].is_complete
        assert all(s.processed_files <= s.total_files for s in snapshots)

    def test_estimated_time_remaining(self, make_workspace):
        ticks = iter([0.0, 2.0, 4.0, 6.0, 8.0, 10.0])
        files = {f"f{i}.js": "x\n" for i in range(3)}
        scanner = CodeScanner(make_workspace(files), clock=lambda: next(ticks))
        snapshots: list[ScanProgress] = []
        scanner.on_progress(snapshots.append)

        scanner.scan_project(JS_OPTIONS)
        scanner.flush_progress()

        # elapsed / (i + 1) * remaining files
        assert [s.estimated_seconds_remaining for s in snapshots[:3]] == [4, 2, 0]

    def test_progress_copy_is_independent(self, make_workspace):
        scanner = CodeScanner(make_workspace())
        progress = scanner.get_scan_progress()
        progress.processed_files = 42
        assert scanner.get_scan_progress().processed_files == 0

    def test_empty_file_set_completes(self, make_workspace):
        scanner = CodeScanner(make_workspace())
        assert scanner.scan_project(JS_OPTIONS) == []
        progress = scanner.get_scan_progress()
        assert progress.is_complete
        assert progress.percentage == 100
        assert progress.total_files == 0

    def test_failing_listener_does_not_break_scan(self, make_workspace):
        scanner = CodeScanner(make_workspace({"a.js": "converge.payment.create()\n"}))

        def broken(_: ScanProgress) -> None:
            raise RuntimeError("listener bug")

        scanner.on_progress(broken)
        assert scanner.scan_project(JS_OPTIONS)
        scanner.flush_progress()
