"""Command-line interface for gerrit-changes."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from gerrit_changes import __version__
from gerrit_changes.config import load_config, validate_config
from gerrit_changes.gerrit.client import ApiError, GerritClient
from gerrit_changes.open_changes import OutputFormat, open_changes
from gerrit_changes.project import DetectionError, detect_project

err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def fail(message: str) -> None:
    """Print an error and exit with a failure status."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """gerrit-changes - Gerrit change queries for the current checkout."""
    setup_logging(verbose)


@cli.command("open-changes")
@click.option(
    "-n",
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of changes (default: 20)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--xml", "as_xml", is_flag=True, help="Output as XML")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def open_changes_cmd(
    limit: int | None,
    as_json: bool,
    as_xml: bool,
    no_color: bool,
    config_path: str | None,
) -> None:
    """List open changes for the project of the current git checkout."""
    try:
        project = detect_project()
    except DetectionError as e:
        fail(str(e))

    config = load_config(Path(config_path) if config_path else None)
    errors = validate_config(config)
    if errors:
        for error in errors:
            err_console.print(f"[red]Config error:[/red] {escape(error)}", highlight=False)
        sys.exit(1)

    if limit is None:
        limit = config.output.default_limit

    console = Console(highlight=False, no_color=no_color or not config.output.color)
    client = GerritClient.from_config(config)

    try:
        open_changes(
            client,
            limit=limit,
            output_format=OutputFormat.from_flags(json=as_json, xml=as_xml),
            console=console,
            project=project,
        )
    except ApiError as e:
        fail(str(e))


@cli.group("config")
def config_group() -> None:
    """Configuration commands."""
    pass


@config_group.command("validate")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def config_validate(config_path: str | None) -> None:
    """Validate configuration file."""
    try:
        config = load_config(Path(config_path) if config_path else None)
    except Exception as e:
        err_console.print(f"[red]Error loading config:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        err_console.print("[red]Configuration is invalid:[/red]")
        for error in errors:
            err_console.print(f"  • {escape(error)}", highlight=False)
        sys.exit(1)

    Console().print("[green]✓ Configuration is valid[/green]")


@config_group.command("show")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def config_show(config_path: str | None) -> None:
    """Show current configuration."""
    config = load_config(Path(config_path) if config_path else None)
    console = Console()

    table = Table(title="Current Configuration")
    table.add_column("Setting")
    table.add_column("Value")

    table.add_row("gerrit.url", config.gerrit.url or "-")
    table.add_row("gerrit.username", config.gerrit.username or "-")
    table.add_row("gerrit.password", "********" if config.gerrit.password else "-")
    table.add_row("gerrit.timeout_seconds", str(config.gerrit.timeout_seconds))
    table.add_row("gerrit.verify_ssl", str(config.gerrit.verify_ssl))
    table.add_row("output.color", str(config.output.color))
    table.add_row("output.default_limit", str(config.output.default_limit))

    console.print(table)


if __name__ == "__main__":
    cli()
