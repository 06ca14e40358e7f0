"""Run command implementation.

Hosts the scheduled synchronization worker: loads settings, configures
logging, checks both roots and runs passes on the configured interval
until SIGINT or SIGTERM is received.
"""

import logging
import signal
from datetime import timedelta
from pathlib import Path
from types import FrameType
from typing import Annotated

import typer

from foldersync.cli.commands.sync import resolve_settings
from foldersync.core.errors import FolderSyncError
from foldersync.core.logs import configure_logging
from foldersync.core.worker import SyncWorker
from foldersync.utils.formatting import print_error, print_info

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Run scheduled synchronization passes.",
    invoke_without_command=True,
)

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@app.callback(invoke_without_command=True)
def run(
    ctx: typer.Context,
    source: Annotated[
        Path | None,
        typer.Option("--source", "-s", help="Directory to mirror."),
    ] = None,
    target: Annotated[
        Path | None,
        typer.Option("--target", "-t", help="Directory to update."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file (default: ~/.config/foldersync/config.toml).",
        ),
    ] = None,
    interval: Annotated[
        float | None,
        typer.Option(
            "--interval",
            "-i",
            help="Seconds between passes (default: 600).",
            min=0.001,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            "-l",
            help="Log file (default: ./SyncLogs/default.log).",
        ),
    ] = None,
    once: Annotated[
        bool,
        typer.Option("--once", help="Run a single pass and exit."),
    ] = False,
    stop_on_error: Annotated[
        bool,
        typer.Option(
            "--stop-on-error",
            help="Exit when a pass fails instead of waiting for the next one.",
        ),
    ] = False,
) -> None:
    """Keep the target directory mirrored from the source directory.

    Runs a pass, waits for the interval, and repeats until interrupted.
    Every copy, replace and delete is logged to the console and the
    log file.

    Examples:
        foldersync run -s ~/photos -t /mnt/backup/photos
        foldersync run --interval 60 --log-file /var/log/foldersync.log
        foldersync run --once               # use roots from config.toml
    """
    if ctx.invoked_subcommand is not None:
        return

    overrides: dict[str, object] = {
        "source_path": source,
        "target_path": target,
        "sync_interval": timedelta(seconds=interval) if interval is not None else None,
        "log_file_path": log_file,
        "stop_on_error": True if stop_on_error else None,
    }
    settings = resolve_settings(config_path, overrides)

    obj = ctx.obj or {}
    try:
        configure_logging(
            settings.log_file_path,
            verbose=bool(obj.get("verbose")),
            quiet=bool(obj.get("quiet")),
        )
    except (OSError, RuntimeError) as e:
        print_error(f"Cannot open log file {settings.log_file_path}: {e}")
        raise typer.Exit(code=1) from e

    worker = SyncWorker(settings)

    def _request_stop(signum: int, _frame: FrameType | None) -> None:
        logger.info("Received %s, stopping after the current pass", signal.Signals(signum).name)
        worker.stop()

    previous = {sig: signal.signal(sig, _request_stop) for sig in _STOP_SIGNALS}
    try:
        passes = worker.run(max_passes=1 if once else None)
    except FolderSyncError as e:
        print_error(f"Sync failed: {e}")
        raise typer.Exit(code=1) from e
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    print_info(f"Completed {passes} synchronization pass(es).")
