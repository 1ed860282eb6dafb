"""Shared Rich display functions for scan reports and deletion outcomes.

Provides reusable table builders and summary printers used by the
scan and clean commands.
"""

from rich.markup import escape
from rich.table import Table

from vaultclean.scanner.models import DeletionOutcome, ScanEntry, ScanReport
from vaultclean.utils.formatting import (
    console,
    format_size,
    print_info,
    print_success,
    print_warning,
)


def create_entries_table(entries: list[ScanEntry], title: str) -> Table:
    """Create a Rich table listing scan entries.

    Args:
        entries: Entries to display, in report order.
        title: Table title.

    Returns:
        Rich Table with Type, Path and Size columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Type", width=9)
    table.add_column("Path", no_wrap=True)
    table.add_column("Size", justify="right", width=10)

    for entry in entries:
        if entry.is_directory:
            kind = "[directory]folder[/directory]"
            size = "-"
        else:
            kind = "[file]file[/file]"
            size = format_size(entry.size)
        table.add_row(kind, escape(entry.path), f"[muted]{size}[/muted]")

    return table


def print_report(report: ScanReport, limit: int | None = None) -> None:
    """Print a scan report as tables followed by a summary line.

    Args:
        report: Report to display.
        limit: Maximum number of entries shown per section.
    """
    sections = (
        ("Empty Folders", report.empty_directories),
        ("Unlinked Files", report.unlinked_files),
    )
    for title, entries in sections:
        if not entries:
            continue
        shown = entries[:limit] if limit else entries
        console.print(create_entries_table(shown, title))
        if len(shown) < len(entries):
            console.print(f"[dim](showing {len(shown)} of {len(entries)})[/dim]")

    console.print(
        f"\n[dim]Found {report.total_count} item(s) "
        f"({len(report.empty_directories)} empty folder(s), "
        f"{len(report.unlinked_files)} unlinked file(s), "
        f"{format_size(report.total_size)} total)[/dim]"
    )


def print_deletion_outcome(outcome: DeletionOutcome) -> None:
    """Print the result of a deletion batch.

    Args:
        outcome: Outcome returned by the deletion executor.
    """
    if outcome.dry_run:
        for path in outcome.deleted:
            console.print(f"[muted]would delete[/muted] {escape(path)}")
        print_info(f"Dry-run: {len(outcome.deleted)} item(s) would be deleted.")
    elif outcome.success:
        print_success(f"Deleted {len(outcome.deleted)} item(s).")
    else:
        print_warning(f"{len(outcome.deleted)} deleted, {len(outcome.errors)} failed")

    for error in outcome.errors:
        console.print(f"  [error]✗[/error] {escape(error)}")
