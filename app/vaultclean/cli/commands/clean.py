"""Clean command implementation.

Scans a vault, selects candidates and deletes them after confirmation.
"""

from collections.abc import Callable
from enum import Enum
from fnmatch import fnmatch
from pathlib import Path
from typing import Annotated

import typer

from vaultclean.cli.display import create_entries_table, print_deletion_outcome
from vaultclean.cli.types import (
    CleanableOption,
    HiddenOption,
    MaxDepthOption,
    MinSizeOption,
    ProtectedOption,
    VaultOption,
    require_settings,
    scan_overrides,
)
from vaultclean.core.session import CleanupSession
from vaultclean.scanner.models import EntryKind, ScanEntry
from vaultclean.scanner.scanner import VaultScanner
from vaultclean.scanner.walker import VaultScanError
from vaultclean.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Delete empty folders and unlinked files from a vault.",
    invoke_without_command=True,
)


class KindFilter(str, Enum):
    """Which kinds of candidates to select."""

    ALL = "all"
    DIRS = "dirs"
    FILES = "files"


def build_selector(kind: KindFilter, patterns: list[str]) -> Callable[[ScanEntry], bool]:
    """Build a selection predicate from the command line filters.

    An entry is selected when it has the requested kind and, if any
    glob patterns are given, its path or name matches one of them.
    """

    def selector(entry: ScanEntry) -> bool:
        if kind == KindFilter.DIRS and entry.kind != EntryKind.DIRECTORY:
            return False
        if kind == KindFilter.FILES and entry.kind != EntryKind.FILE:
            return False
        if not patterns:
            return True
        return any(fnmatch(entry.path, p) or fnmatch(entry.name, p) for p in patterns)

    return selector


@app.callback(invoke_without_command=True)
def clean_vault(
    vault: VaultOption = Path("."),
    kind: Annotated[
        KindFilter,
        typer.Option(
            "--kind",
            "-k",
            help="Select only folders, only files, or both.",
            case_sensitive=False,
        ),
    ] = KindFilter.ALL,
    match: Annotated[
        list[str] | None,
        typer.Option(
            "--match",
            "-m",
            help="Glob on path or name; repeat to select several.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    max_depth: MaxDepthOption = None,
    exclude_hidden: HiddenOption = None,
    min_size: MinSizeOption = None,
    cleanable: CleanableOption = None,
    protected: ProtectedOption = None,
) -> None:
    """Delete cleanup candidates from a vault.

    Candidates come from a fresh scan. Folders are removed only while
    they are still empty; non-empty folders are reported as failures.

    Examples:
        vaultclean clean --dry-run              # Preview deletions
        vaultclean clean --kind dirs -y         # Remove all empty folders
        vaultclean clean -m 'attachments/*'     # Only under attachments/
    """
    require_settings()
    overrides = scan_overrides(max_depth, exclude_hidden, min_size, cleanable, protected)
    session = CleanupSession(VaultScanner(vault), dry_run=dry_run)

    try:
        report = session.scan(**overrides)
    except VaultScanError as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(code=1) from e

    if report is None or report.is_empty:
        print_info("Vault is clean. Nothing to delete.")
        return

    selected_count = session.select(build_selector(kind, match or []))
    if selected_count == 0:
        print_error("No entries match the selection.")
        raise typer.Exit(code=1)

    label = "Planned Deletions (dry-run)" if dry_run else "Planned Deletions"
    console.print(create_entries_table(report.selected, label))

    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nProceed with deleting {selected_count} item(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        outcome = session.delete_selected()
    except VaultScanError as e:
        print_error(f"Rescan failed: {e}")
        raise typer.Exit(code=1) from e

    print_deletion_outcome(outcome)

    if not outcome.dry_run and session.report is not None:
        print_info(f"{session.report.total_count} candidate(s) remaining after rescan.")

    if not outcome.success:
        raise typer.Exit(code=1)
