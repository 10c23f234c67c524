"""CLI command: migrascan scan <directory> — find legacy API usages."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

import click
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from migrascan.config import (
    PROJECT_FILE_NAME,
    MigraScanConfig,
    ProjectSettings,
    load_project_file,
)
from migrascan.scanner.engine import CodeScanner
from migrascan.scanner.errors import PatternFileError, ScanError
from migrascan.scanner.languages import LANGUAGE_EXTENSIONS
from migrascan.scanner.models import Finding, ScanMode, ScanOptions, ScanProgress
from migrascan.scanner.patterns import PatternLibrary, load_pattern_file
from migrascan.workspace import LocalWorkspace

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def _confidence_color(confidence: float) -> str:
    if confidence >= 0.8:
        return "red"
    if confidence >= 0.6:
        return "yellow"
    return "blue"


@click.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in ScanMode]),
    default=None,
    help="Scan mode (default: pattern).",
)
@click.option(
    "--language",
    "-l",
    "languages",
    multiple=True,
    type=click.Choice(sorted(LANGUAGE_EXTENSIONS)),
    help="Languages to scan (default: all).",
)
@click.option("--include", "-i", multiple=True, help="Extra include globs.")
@click.option("--exclude", "-e", multiple=True, help="Extra exclude globs.")
@click.option(
    "--patterns",
    "pattern_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file with additional patterns.",
)
@click.option(
    "--min-confidence",
    type=click.FloatRange(0.0, 1.0),
    default=0.0,
    show_default=True,
    help="Hide findings below this confidence.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
)
@click.pass_context
def scan(
    ctx: click.Context,
    directory: str,
    mode: str | None,
    languages: tuple[str, ...],
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    pattern_files: tuple[str, ...],
    min_confidence: float,
    output_format: str,
) -> None:
    """Scan source code for legacy payment-API usages."""
    config: MigraScanConfig = ctx.obj.get("config") or MigraScanConfig.load()
    settings = _load_settings(ctx.obj.get("project_file"), Path(directory))

    try:
        library = _build_library(config, settings, pattern_files)
    except PatternFileError as e:
        raise click.ClickException(str(e)) from e

    options = ScanOptions(
        mode=ScanMode(mode) if mode else (settings.mode or ScanMode.PATTERN),
        languages=frozenset(languages or settings.languages or LANGUAGE_EXTENSIONS),
        include_globs=settings.include + include,
        exclude_globs=settings.exclude + exclude,
    )

    workspace = LocalWorkspace(
        directory,
        max_results=config.max_files,
        max_file_size=config.max_file_size,
    )
    scanner = CodeScanner(workspace, library=library)
    for pattern in (*config.extra_ignore, *settings.ignore):
        scanner.add_to_ignore_list(pattern)

    quiet = output_format == "json"
    if not quiet:
        console.print(
            f"[bold]migrascan[/bold] {options.mode.value} scan of "
            f"[cyan]{directory}[/cyan]\n"
        )

    findings = _run_with_progress(scanner, options, disable=quiet)
    progress = scanner.get_scan_progress()
    findings = [f for f in findings if f.confidence >= min_confidence]

    if quiet:
        click.echo(json.dumps([f.to_dict() for f in findings], indent=2))
        return

    if findings:
        _print_table(findings)
    else:
        console.print("[green]No findings.[/green]")
    _print_summary(progress, findings)


def _load_settings(project_file: str | None, directory: Path) -> ProjectSettings:
    path = Path(project_file) if project_file else directory / PROJECT_FILE_NAME
    if not path.is_file():
        return ProjectSettings()
    try:
        return load_project_file(path)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def _build_library(
    config: MigraScanConfig,
    settings: ProjectSettings,
    pattern_files: tuple[str, ...],
) -> PatternLibrary:
    library = PatternLibrary.default()
    for path in (*config.pattern_files, *settings.patterns, *pattern_files):
        library = library.extended(load_pattern_file(path))
    return library


def _run_with_progress(
    scanner: CodeScanner, options: ScanOptions, disable: bool
) -> list[Finding]:
    """Run the scan on a worker thread; Ctrl-C cancels cooperatively."""
    findings: list[Finding] = []
    failures: list[Exception] = []

    def worker() -> None:
        try:
            findings.extend(scanner.scan_project(options))
        except Exception as e:
            if not isinstance(e, ScanError):
                logger.exception("Scan failed")
            failures.append(e)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        disable=disable,
        transient=True,
    ) as progress:
        task = progress.add_task("Scanning...", total=None)

        def update(snapshot: ScanProgress) -> None:
            progress.update(
                task,
                completed=snapshot.processed_files,
                total=snapshot.total_files or None,
                description=snapshot.current_file or "Scanning...",
            )

        unsubscribe = scanner.on_progress(update)
        thread = threading.Thread(target=worker, name="migrascan-scan", daemon=True)
        thread.start()
        try:
            while thread.is_alive():
                thread.join(timeout=0.1)
        except KeyboardInterrupt:
            console.print("[yellow]Cancelling scan...[/yellow]")
            scanner.cancel_scan()
            thread.join()
        scanner.flush_progress()
        unsubscribe()

    if failures:
        raise click.ClickException(f"Scan failed: {failures[0]}")
    return findings


def _print_table(findings: list[Finding]) -> None:
    findings = sorted(findings, key=lambda f: (-f.confidence, f.file_path, f.line))

    table = Table(title="Findings", show_lines=False)
    table.add_column("Confidence", justify="right", width=10)
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Type")
    table.add_column("Detail", max_width=40)
    table.add_column("Match", max_width=50)

    for finding in findings:
        color = _confidence_color(finding.confidence)
        table.add_row(
            f"[{color}]{finding.confidence:.2f}[/{color}]",
            finding.file_path,
            str(finding.line),
            finding.endpoint_type.value,
            _detail(finding),
            finding.matched_text[:50],
        )

    console.print(table)


def _detail(finding: Finding) -> str:
    parts = []
    if finding.business_logic_type is not None:
        parts.append(finding.business_logic_type.value)
    for value in (
        finding.class_name,
        finding.method_name,
        finding.dto_name,
        finding.endpoint_url,
        finding.framework,
    ):
        if value:
            parts.append(value)
    return " ".join(parts)


def _print_summary(progress: ScanProgress, findings: list[Finding]) -> None:
    status = "cancelled" if progress.is_cancelled else "complete"
    console.print(
        f"\nScanned {progress.processed_files} of {progress.total_files} files "
        f"({status})"
    )
    console.print(f"Total findings: {len(findings)}")
