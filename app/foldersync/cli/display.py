"""Shared Rich display functions for synchronization reports.

Provides the table builder and summary printer used by the ``sync``
and ``run`` commands.
"""

from rich.table import Table

from foldersync.models.entry import EntryKind
from foldersync.models.report import SyncActionType, SyncReport
from foldersync.utils.formatting import action_markup, console, print_success

_ACTION_LABELS: dict[SyncActionType, str] = {
    SyncActionType.COPY: "+copy",
    SyncActionType.REPLACE: "~replace",
    SyncActionType.DELETE: "-delete",
}


def create_actions_table(report: SyncReport) -> Table:
    """Create a Rich table displaying the actions of a pass.

    Builds a formatted table with Action, Type and Path columns. Each
    action type is styled distinctly: copy, replace and delete.

    Args:
        report: Report of the pass.

    Returns:
        Rich Table configured for action display.
    """
    title = "Planned Actions (Dry Run)" if report.dry_run else "Sync Actions"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Action", width=10, justify="center")
    table.add_column("Type", width=10)
    table.add_column("Path", no_wrap=True)

    for action in report.actions:
        path = f"{action.path}/" if action.kind == EntryKind.DIRECTORY else action.path
        table.add_row(
            action_markup(_ACTION_LABELS[action.action_type], action.action_type),
            action.kind.value,
            action_markup(path, action.action_type),
        )

    return table


def print_report_summary(report: SyncReport) -> None:
    """Print a summary of a pass.

    Shows an in-sync message when nothing changed, otherwise the counts
    of copied, replaced and deleted entries.

    Args:
        report: Report of the pass.
    """
    if report.is_in_sync:
        print_success("Target is in sync with source. Nothing to do.")
        return

    counts = (
        (SyncActionType.COPY, report.copied, "copied"),
        (SyncActionType.REPLACE, report.replaced, "replaced"),
        (SyncActionType.DELETE, report.deleted, "deleted"),
    )
    parts = [action_markup(f"{n} {word}", t) for t, n, word in counts if n]

    prefix = "Would apply" if report.dry_run else "Summary"
    console.print(f"\n{prefix}: {', '.join(parts)}")
