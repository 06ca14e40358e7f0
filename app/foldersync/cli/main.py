"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from foldersync import __version__
from foldersync.cli.commands import config, run, sync

# Create main Typer app
app = typer.Typer(
    name="foldersync",
    help="One-way periodic directory mirroring.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"foldersync version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """foldersync - keep a target directory identical to a source directory.

    Files and directories only in the source are copied, changed files
    are overwritten and anything only in the target is deleted.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(sync.app, name="sync")
app.add_typer(run.app, name="run")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
