"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from vaultclean import __version__
from vaultclean.cli.commands import clean, config, scan
from vaultclean.utils.log import setup_logging

app = typer.Typer(
    name="vaultclean",
    help="Find and remove empty folders and unlinked files in a notes vault.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"vaultclean version {__version__}")
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
            help="Suppress warnings.",
        ),
    ] = False,
) -> None:
    """vaultclean - Clean up a Markdown notes vault.

    Empty folders and attachments that no note links to are reported,
    and removed only after you select and confirm them.
    """
    setup_logging(verbose=verbose, quiet=quiet)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


app.add_typer(scan.app, name="scan")
app.add_typer(clean.app, name="clean")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
