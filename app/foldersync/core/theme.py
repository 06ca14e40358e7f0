"""Console styles for foldersync output.

Styles are Rich style definitions bundled in ``data/theme.toml``. Each
sync action type has an ``action.<type>`` style, used wherever a copy,
replacement or deletion is printed.
"""

import tomllib
from functools import cache
from importlib import resources

from rich.theme import Theme

from foldersync.models.report import SyncActionType


def action_style(action_type: SyncActionType) -> str:
    """Name of the style that colours an action type."""
    return f"action.{action_type.value}"


def load_styles() -> dict[str, str]:
    """Read the bundled style definitions.

    Returns:
        Mapping of style name to Rich style definition.
    """
    bundled = resources.files("foldersync.data").joinpath("theme.toml")
    with bundled.open("rb") as f:
        return dict(tomllib.load(f)["styles"])


@cache
def get_theme() -> Theme:
    """Build the Rich theme shared by the consoles.

    Raises:
        rich.errors.StyleSyntaxError: If a bundled style is malformed.
    """
    return Theme(load_styles())
