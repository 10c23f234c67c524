"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from migrascan import __version__
from migrascan.config import MigraScanConfig


@click.group()
@click.version_option(version=__version__, prog_name="migrascan")
@click.option(
    "--config",
    "-c",
    "project_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a .migrascan.yaml project file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, project_file: str | None, verbose: bool) -> None:
    """migrascan — find legacy payment-API usages that need migrating."""
    ctx.ensure_object(dict)
    config = MigraScanConfig.load()
    config.verbose = verbose
    ctx.obj["config"] = config
    ctx.obj["project_file"] = project_file

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from migrascan.cli.patterns import patterns  # noqa: F811
    from migrascan.cli.scan import scan  # noqa: F811

    main.add_command(scan)
    main.add_command(patterns)


_register_commands()
