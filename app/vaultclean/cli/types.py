"""Shared types and utilities for CLI commands.

This module provides the scan options shared by the scan and clean
commands, plus helpers that turn them into per-call overrides.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from vaultclean.core.settings import Settings, SettingsError, load_settings
from vaultclean.utils.formatting import print_error, print_info


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


VaultOption = Annotated[
    Path,
    typer.Option(
        "--vault",
        "-p",
        help="Vault directory to scan.",
        file_okay=False,
    ),
]
MaxDepthOption = Annotated[
    int | None,
    typer.Option(
        "--max-depth",
        "-d",
        min=0,
        help="Deepest folder level to evaluate (overrides settings).",
    ),
]
HiddenOption = Annotated[
    bool | None,
    typer.Option(
        "--exclude-hidden/--include-hidden",
        help="Skip or include dot-prefixed entries (overrides settings).",
        show_default=False,
    ),
]
MinSizeOption = Annotated[
    int | None,
    typer.Option(
        "--min-size",
        min=0,
        help="Minimum file size in bytes (overrides settings).",
    ),
]
CleanableOption = Annotated[
    str | None,
    typer.Option(
        "--cleanable",
        help="Regex for cleanable file names (overrides settings).",
    ),
]
ProtectedOption = Annotated[
    str | None,
    typer.Option(
        "--protected",
        help="Regex for protected file names (overrides settings).",
    ),
]


def scan_overrides(
    max_depth: int | None,
    exclude_hidden: bool | None,
    min_size: int | None,
    cleanable: str | None,
    protected: str | None,
) -> dict[str, Any]:
    """Collect command line overrides for Settings.to_scan_config().

    Options left unset are omitted so the stored settings apply.
    """
    overrides: dict[str, Any] = {
        "max_depth": max_depth,
        "exclude_hidden": exclude_hidden,
        "min_file_size": min_size,
        "cleanable_pattern": cleanable,
        "protected_pattern": protected,
    }
    return {key: value for key, value in overrides.items() if value is not None}


def require_settings() -> Settings:
    """Load settings or exit with a helpful error message.

    Raises:
        typer.Exit: If the settings file cannot be loaded.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        print_info("Run 'vaultclean config reset' to restore defaults.")
        raise typer.Exit(code=1) from e
