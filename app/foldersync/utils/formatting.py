"""Console output helpers for the foldersync CLI.

Messages and report rows often carry file paths. They are escaped so a
name such as ``photos[2020]`` prints verbatim instead of being parsed
as Rich markup.
"""

from rich.console import Console
from rich.markup import escape

from foldersync.core.theme import action_style, get_theme
from foldersync.models.report import SyncActionType

# No highlighting: paths and counts would be recoloured by Rich's guesses
console = Console(theme=get_theme(), highlight=False)
err_console = Console(theme=get_theme(), stderr=True, highlight=False)


def print_info(message: str) -> None:
    console.print(escape(message), style="info")


def print_success(message: str) -> None:
    console.print(escape(message), style="success")


def print_warning(message: str) -> None:
    """Print a warning on stderr."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error on stderr."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def action_markup(text: str, action_type: SyncActionType) -> str:
    """Wrap text in the style of an action type.

    Args:
        text: Plain text, escaped before styling.
        action_type: Copy, replace or delete.

    Returns:
        Rich markup string.
    """
    style = action_style(action_type)
    return f"[{style}]{escape(text)}[/{style}]"
