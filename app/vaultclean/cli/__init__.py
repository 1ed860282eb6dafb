"""CLI package for vaultclean.

This package contains the Typer application and all subcommands.
"""

from vaultclean.cli.main import app

__all__ = ["app"]
