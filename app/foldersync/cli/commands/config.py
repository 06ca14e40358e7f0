"""Settings file commands.

Provides commands to create the settings file used by ``foldersync run``
and to display the effective settings.
"""

from datetime import timedelta
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from foldersync.core.errors import FolderSyncError
from foldersync.core.paths import get_default_log_path, get_settings_path
from foldersync.core.settings import (
    DEFAULT_SYNC_INTERVAL,
    SyncSettings,
    load_settings,
    save_settings,
)
from foldersync.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Manage the settings file.",
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Settings file to read."),
    ] = None,
) -> None:
    """Show the settings read from the settings file."""
    path = config_path or get_settings_path()
    try:
        settings = load_settings(config_path)
    except FolderSyncError as e:
        print_error(str(e))
        print_info("Run 'foldersync config init' to create a settings file.")
        raise typer.Exit(code=1) from e

    table = Table(title=f"Settings ({path})", show_header=True, header_style="bold_header")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_column("Status", style="dim")

    for label, value in (
        ("source_path", settings.source_path),
        ("target_path", settings.target_path),
    ):
        status = "[success]ok[/]" if value.is_dir() else "[error]missing[/]"
        table.add_row(label, str(value), status)
    table.add_row("sync_interval", str(settings.sync_interval), "")
    table.add_row("log_file_path", str(settings.log_file_path), "")
    table.add_row("stop_on_error", str(settings.stop_on_error).lower(), "")

    console.print(table)


@app.command()
def init(
    source: Annotated[
        Path,
        typer.Option("--source", "-s", help="Directory to mirror."),
    ],
    target: Annotated[
        Path,
        typer.Option("--target", "-t", help="Directory to update."),
    ],
    interval: Annotated[
        float,
        typer.Option("--interval", "-i", help="Seconds between passes.", min=0.001),
    ] = DEFAULT_SYNC_INTERVAL.total_seconds(),
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", "-l", help="Log file (default: ./SyncLogs/default.log)."),
    ] = None,
    stop_on_error: Annotated[
        bool,
        typer.Option("--stop-on-error", help="Stop the worker after a failed pass."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Settings file to write."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Create a settings file for scheduled synchronization."""
    path = config_path or get_settings_path()
    if path.exists() and not force:
        print_error(f"Settings file already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    settings = SyncSettings(
        source_path=source.expanduser().absolute(),
        target_path=target.expanduser().absolute(),
        sync_interval=timedelta(seconds=interval),
        log_file_path=(log_file or get_default_log_path()).expanduser().absolute(),
        stop_on_error=stop_on_error,
    )

    try:
        saved = save_settings(settings, path)
    except FolderSyncError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written: {saved}")
    for label, root in (("Source", settings.source_path), ("Target", settings.target_path)):
        if not root.is_dir():
            print_warning(f"{label} directory doesn't exist yet: {root}")
