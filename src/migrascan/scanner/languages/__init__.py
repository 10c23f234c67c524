"""Per-language pattern tables and the extension → language map."""

from __future__ import annotations

from migrascan.scanner.languages import csharp, java, javascript, php, python, ruby, vb

LANGUAGE_MODULES = (javascript, java, csharp, python, php, ruby, vb)

LANGUAGE_EXTENSIONS: dict[str, tuple[str, ...]] = {
    module.LANGUAGE: module.EXTENSIONS for module in LANGUAGE_MODULES
}
