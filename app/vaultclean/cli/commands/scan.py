"""Scan command implementation.

Lists empty folders and unreferenced files in a vault.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from vaultclean.cli.display import print_report
from vaultclean.cli.types import (
    CleanableOption,
    HiddenOption,
    MaxDepthOption,
    MinSizeOption,
    OutputFormat,
    ProtectedOption,
    VaultOption,
    require_settings,
    scan_overrides,
)
from vaultclean.scanner.models import ScanReport
from vaultclean.scanner.scanner import VaultScanner
from vaultclean.scanner.walker import VaultScanError
from vaultclean.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Scan a vault for empty folders and unlinked files.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_vault(
    vault: VaultOption = Path("."),
    max_depth: MaxDepthOption = None,
    exclude_hidden: HiddenOption = None,
    min_size: MinSizeOption = None,
    cleanable: CleanableOption = None,
    protected: ProtectedOption = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export scan results to JSON file.",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Limit number of entries shown per section.",
        ),
    ] = None,
) -> None:
    """Scan a vault and display cleanup candidates.

    Nothing is deleted. Use 'vaultclean clean' to remove candidates.

    Examples:
        vaultclean scan                         # Scan the current directory
        vaultclean scan -p ~/Notes              # Scan another vault
        vaultclean scan --max-depth 2           # Only look two folders deep
        vaultclean scan --protected '\\.pdf$'    # Never propose PDFs
        vaultclean scan --format json           # Output as JSON
    """
    settings = require_settings()
    config = settings.to_scan_config(
        **scan_overrides(max_depth, exclude_hidden, min_size, cleanable, protected)
    )

    try:
        report = VaultScanner(vault).scan(config)
    except VaultScanError as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(code=1) from e

    if export_path is not None:
        _export_report(report, export_path)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report.to_dict()))
        return

    if report.is_empty:
        print_success("Vault is clean. No empty folders or unlinked files found.")
        return

    print_report(report, limit=limit)


def _export_report(report: ScanReport, export_path: Path) -> None:
    """Export a scan report to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(report.to_dict(), indent=2))
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
    print_info(f"Results exported to {export_path}")
