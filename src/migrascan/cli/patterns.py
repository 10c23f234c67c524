"""CLI command: migrascan patterns — list the built-in pattern library."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from migrascan.scanner.languages import LANGUAGE_EXTENSIONS
from migrascan.scanner.models import ScanMode
from migrascan.scanner.patterns import PatternLibrary

console = Console()


@click.command()
@click.option(
    "--language",
    "-l",
    type=click.Choice(sorted(LANGUAGE_EXTENSIONS)),
    default=None,
    help="Only show this language.",
)
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in ScanMode]),
    default=None,
    help="Only show this scan mode.",
)
def patterns(language: str | None, mode: str | None) -> None:
    """List detection patterns by language and scan mode."""
    library = PatternLibrary.default()
    languages = [language] if language else library.languages
    modes = [ScanMode(mode)] if mode else list(ScanMode)

    table = Table(title="Patterns", show_lines=False)
    table.add_column("Language", style="cyan")
    table.add_column("Mode")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Regex", overflow="fold")

    for lang in languages:
        for m in modes:
            for entry in library.patterns_for(lang, m):
                table.add_row(
                    lang, m.value, entry.kind.value, entry.name, entry.regex.pattern
                )

    console.print(table)
