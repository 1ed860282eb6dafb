"""Settings management commands.

Provides commands to show, locate, change and reset the cleanup
settings stored in ~/.config/vaultclean/settings.toml.
"""

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from vaultclean.cli.types import require_settings
from vaultclean.core.paths import get_settings_path
from vaultclean.core.settings import Settings, SettingsError, reset_settings, save_settings
from vaultclean.scanner.patterns import is_valid_pattern
from vaultclean.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and change cleanup settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)

_PATTERN_KEYS = ("cleanable_pattern", "protected_pattern")


@app.command()
def show() -> None:
    """Show the current settings."""
    settings = require_settings()

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", style="bold")
    table.add_column("Value")

    for key, value in settings.model_dump().items():
        table.add_row(key, escape(repr(value) if isinstance(value, str) else str(value)))

    console.print(table)
    console.print(f"[dim]{get_settings_path()}[/dim]")


@app.command()
def path() -> None:
    """Print the settings file path."""
    typer.echo(str(get_settings_path()))


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. max_scan_depth.")],
    value: Annotated[str, typer.Argument(help="New value.")],
) -> None:
    """Change one setting and save it.

    Examples:
        vaultclean config set max_scan_depth 5
        vaultclean config set protected_pattern '\\.(md|canvas|base|pdf)$'
        vaultclean config set exclude_hidden false
    """
    settings = require_settings()

    if key not in Settings.model_fields:
        print_error(f"Unknown setting: {key}")
        print_info(f"Available settings: {', '.join(Settings.model_fields)}")
        raise typer.Exit(code=1)

    if key in _PATTERN_KEYS and not is_valid_pattern(value):
        print_error(f"Invalid regular expression for {key}: {escape(repr(value))}")
        raise typer.Exit(code=1)

    try:
        updated = Settings.model_validate({**settings.model_dump(), key: value})
    except ValidationError as e:
        print_error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1) from e

    try:
        saved_to = save_settings(updated)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Set {key} = {escape(repr(getattr(updated, key)))}")
    print_info(f"Saved to {saved_to}")


@app.command()
def reset(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Restore the default settings."""
    if not yes:
        confirmed = typer.confirm("Reset all settings to defaults?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        reset_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings reset to defaults at {get_settings_path()}")
