"""Sync command implementation.

Runs a single synchronization pass from the command line and prints
the actions taken, or planned with ``--dry-run``.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from foldersync.cli.display import create_actions_table, print_report_summary
from foldersync.core.errors import FolderSyncError, SyncError
from foldersync.core.logs import configure_logging
from foldersync.core.reconciler import Reconciler
from foldersync.core.settings import SyncSettings, load_settings, validate_roots
from foldersync.utils.formatting import console, print_error

app = typer.Typer(
    help="Run a single synchronization pass.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options for sync results."""

    TABLE = "table"
    JSON = "json"


def resolve_settings(
    config_path: Path | None,
    overrides: dict[str, object],
) -> SyncSettings:
    """Load settings and check both roots, or exit with an error message.

    Args:
        config_path: Explicit settings file, or None for the default one.
        overrides: Command-line values taking precedence over the file.

    Returns:
        Validated settings whose roots exist.

    Raises:
        typer.Exit: If settings are invalid or a root is missing.
    """
    try:
        settings = load_settings(config_path, overrides)
        validate_roots(settings)
    except FolderSyncError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return settings


@app.callback(invoke_without_command=True)
def sync(
    ctx: typer.Context,
    source: Annotated[
        Path | None,
        typer.Option(
            "--source",
            "-s",
            help="Directory to mirror (overrides the settings file).",
        ),
    ] = None,
    target: Annotated[
        Path | None,
        typer.Option(
            "--target",
            "-t",
            help="Directory to update (overrides the settings file).",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file (default: ~/.config/foldersync/config.toml).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would change without changing anything.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Mirror the source directory onto the target directory once.

    Examples:
        foldersync sync -s ~/photos -t /mnt/backup/photos
        foldersync sync --dry-run            # use roots from config.toml
        foldersync sync -n --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = resolve_settings(config_path, {"source_path": source, "target_path": target})

    obj = ctx.obj or {}
    if obj.get("verbose"):
        configure_logging(verbose=True)

    reconciler = Reconciler(dry_run=dry_run)
    try:
        report = reconciler.sync_contents(settings.source_path, settings.target_path)
    except SyncError as e:
        print_error(f"Sync failed: {e}")
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report.to_dict()))
        return

    if report.actions and not obj.get("quiet"):
        console.print(create_actions_table(report))
    print_report_summary(report)
