"""Scan session controller — runs one cancellable, progress-reporting scan at a time."""

from __future__ import annotations

import enum
import logging
import threading
import time
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from migrascan.scanner.classifier import classify, detect_framework
from migrascan.scanner.errors import (
    FileAccessError,
    PatternExecutionError,
    SessionConflictError,
)
from migrascan.scanner.extractor import extract, split_lines
from migrascan.scanner.ignore import IgnoreList
from migrascan.scanner.languages import LANGUAGE_EXTENSIONS
from migrascan.scanner.models import (
    Finding,
    RawMatch,
    ScanMode,
    ScanOptions,
    ScanProgress,
)
from migrascan.scanner.patterns import PatternLibrary
from migrascan.scanner.progress import ProgressBroadcaster, ProgressListener
from migrascan.scanner.scoring import score

if TYPE_CHECKING:
    from migrascan.workspace import Workspace

logger = logging.getLogger(__name__)


class ScanState(enum.Enum):
    """Lifecycle state of a scan session."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


class CodeScanner:
    """Scans a workspace for legacy payment-API usages.

    One session runs at a time per instance. Cancellation is polled
    between files; a file already being scanned always finishes.
    """

    def __init__(
        self,
        workspace: Workspace,
        library: PatternLibrary | None = None,
        ignore_list: IgnoreList | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._workspace = workspace
        self._library = (
            library if library is not None else PatternLibrary.default()
        )
        self._ignore = ignore_list if ignore_list is not None else IgnoreList()
        self._clock = clock
        self._broadcaster = ProgressBroadcaster()
        self._lock = threading.Lock()
        self._state = ScanState.IDLE
        self._last_outcome: ScanState | None = None
        self._cancel: threading.Event | None = None
        self._progress = ScanProgress()

    @property
    def state(self) -> ScanState:
        with self._lock:
            return self._state

    @property
    def last_outcome(self) -> ScanState | None:
        """COMPLETED or CANCELLED for the most recent finished scan."""
        with self._lock:
            return self._last_outcome

    @property
    def library(self) -> PatternLibrary:
        return self._library

    # ---- public surface ----

    def scan_project(self, options: ScanOptions) -> list[Finding]:
        """Run a full scan and return every finding.

        Returns once the scan has completed or been cancelled. Raises
        SessionConflictError if a scan is already running.
        """
        with self._lock:
            if self._state is ScanState.RUNNING:
                raise SessionConflictError("Scan already in progress")
            self._state = ScanState.RUNNING
            self._cancel = cancel = threading.Event()
            self._progress = ScanProgress()

        try:
            return self._run(options, cancel)
        finally:
            with self._lock:
                self._state = ScanState.IDLE
                self._cancel = None

    def cancel_scan(self) -> None:
        """Request cancellation of the running scan. No-op when idle."""
        with self._lock:
            if self._cancel is None or self._cancel.is_set():
                return
            self._cancel.set()
        logger.info("Scan cancellation requested")

    def get_scan_progress(self) -> ScanProgress:
        """Return a point-in-time copy of the current progress."""
        with self._lock:
            return self._progress.snapshot()

    def add_to_ignore_list(self, pattern: str) -> None:
        if self._ignore.add(pattern):
            logger.info("Added to ignore list: %s", pattern)

    def get_ignore_list(self) -> list[str]:
        return self._ignore.patterns()

    def on_progress(self, listener: ProgressListener) -> Callable[[], None]:
        """Subscribe to progress snapshots; returns an unsubscribe callable."""
        return self._broadcaster.subscribe(listener)

    def flush_progress(self) -> None:
        """Wait until all published progress snapshots reached listeners."""
        self._broadcaster.flush()

    # ---- session internals ----

    def _run(self, options: ScanOptions, cancel: threading.Event) -> list[Finding]:
        start = self._clock()
        files = self._resolve_files(options)
        total = len(files)

        with self._lock:
            self._progress.total_files = total

        logger.info("Starting %s scan of %d files", options.mode.value, total)

        findings: list[Finding] = []
        for index, path in enumerate(files):
            if cancel.is_set():
                with self._lock:
                    self._progress.is_cancelled = True
                break
            self._advance(index, total, path, start)
            try:
                findings.extend(self._scan_file(path, options.mode))
            except Exception:
                logger.warning(
                    "Skipping %s after unexpected error", path, exc_info=True
                )

        with self._lock:
            if self._progress.is_cancelled:
                self._last_outcome = ScanState.CANCELLED
            else:
                self._progress.is_complete = True
                self._progress.percentage = 100
                self._progress.processed_files = total
                self._progress.estimated_seconds_remaining = 0
                self._last_outcome = ScanState.COMPLETED
            final = self._progress.snapshot()
        self._broadcaster.publish(final)

        elapsed_ms = (self._clock() - start) * 1000
        if final.is_cancelled:
            logger.info(
                "Scan cancelled after %d of %d files; %d findings so far",
                final.processed_files,
                total,
                len(findings),
            )
        else:
            logger.info(
                "Scan completed. Found %d matches in %.0fms", len(findings), elapsed_ms
            )
        return findings

    def _resolve_files(self, options: ScanOptions) -> list[str]:
        include: list[str] = []
        for language in sorted(options.languages):
            extensions = LANGUAGE_EXTENSIONS.get(language)
            if extensions is None:
                logger.debug("No file extensions known for language '%s'", language)
                continue
            include.extend(f"**/*{ext}" for ext in extensions)
        include.extend(options.include_globs)

        exclude = [*self._ignore.patterns(), *options.exclude_globs]

        files = self._workspace.enumerate_files(_unique(include), _unique(exclude))
        return _unique(files)

    def _advance(self, index: int, total: int, path: str, start: float) -> None:
        elapsed = self._clock() - start
        avg_per_file = elapsed / (index + 1)
        with self._lock:
            self._progress.current_file = path
            self._progress.processed_files = index
            self._progress.percentage = index * 100 // total
            self._progress.estimated_seconds_remaining = round(
                avg_per_file * (total - index - 1)
            )
            snapshot = self._progress.snapshot()
        self._broadcaster.publish(snapshot)

    def _scan_file(self, path: str, mode: ScanMode) -> list[Finding]:
        language = self._workspace.detect_language(path)
        if language is None:
            return []
        patterns = self._library.patterns_for(language, mode)
        if not patterns:
            return []

        try:
            content = self._workspace.read_text_file(path)
        except FileAccessError as e:
            logger.warning("Skipping %s: %s", path, e.reason)
            return []

        lines = split_lines(content)
        framework = None
        if mode is not ScanMode.PATTERN:
            framework = detect_framework(content, language)

        findings: list[Finding] = []
        for entry in patterns:
            try:
                raw_matches = extract(content, entry, lines)
            except PatternExecutionError as e:
                logger.warning("Skipping pattern for %s: %s", path, e)
                continue
            for raw in raw_matches:
                findings.append(
                    self._make_finding(path, language, mode, raw, framework)
                )

        logger.debug("%s: %d findings", path, len(findings))
        return findings

    def _make_finding(
        self,
        path: str,
        language: str,
        mode: ScanMode,
        raw: RawMatch,
        framework: str | None,
    ) -> Finding:
        classification = classify(raw, mode)
        return Finding(
            file_path=path,
            line=raw.line,
            column=raw.column,
            snippet=raw.snippet,
            matched_text=raw.matched_text,
            confidence=score(raw.matched_text, raw.line_text, language),
            endpoint_type=classification.endpoint_type,
            language=language,
            scan_mode=mode,
            framework=framework,
            class_name=classification.class_name,
            method_name=classification.method_name,
            endpoint_url=classification.endpoint_url,
            dto_name=classification.dto_name,
            business_logic_type=classification.business_logic_type,
        )
