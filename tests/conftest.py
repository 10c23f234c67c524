"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from migrascan.scanner.errors import FileAccessError
from migrascan.workspace import detect_language


class FakeWorkspace:
    """In-memory Workspace: path → content, with optional unreadable paths."""

    def __init__(
        self,
        files: dict[str, str] | None = None,
        unreadable: set[str] | None = None,
    ) -> None:
        self.files = dict(files or {})
        self.unreadable = set(unreadable or ())
        self.enumerate_calls: list[tuple[list[str], list[str]]] = []
        self.on_enumerate: Callable[[], None] | None = None
        self.on_read: Callable[[str], None] | None = None

    def enumerate_files(
        self, include_globs: list[str], exclude_globs: list[str]
    ) -> list[str]:
        self.enumerate_calls.append((list(include_globs), list(exclude_globs)))
        if self.on_enumerate:
            self.on_enumerate()
        return list(self.files)

    def read_text_file(self, path: str) -> str:
        if self.on_read:
            self.on_read(path)
        if path in self.unreadable:
            raise FileAccessError(path, "permission denied")
        return self.files[path]

    def detect_language(self, path: str) -> str | None:
        return detect_language(path)


@pytest.fixture
def fake_workspace() -> FakeWorkspace:
    return FakeWorkspace()


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """A small on-disk project using the legacy dialect."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "payment.js").write_text(
        "const converge = require('converge-api');\n"
        "const CONVERGE_API_URL = 'https://api.converge.elavonaws.com/v1';\n"
        "\n"
        "async function processPayment(data) {\n"
        "  return converge.payment.create(data);\n"
        "}\n"
    )
    (tmp_path / "src" / "PaymentService.java").write_text(
        "import com.converge.api.ConvergeClient;\n"
        "\n"
        "public class PaymentService {\n"
        "    private ConvergeClient client;\n"
        "}\n"
    )
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "vendor.js").write_text(
        "converge.payment.create({});\n"
    )
    (tmp_path / "README.md").write_text("converge.payment.create\n")
    return tmp_path


@pytest.fixture
def make_workspace() -> type[FakeWorkspace]:
    return FakeWorkspace
