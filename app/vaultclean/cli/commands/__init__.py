"""CLI commands for vaultclean.

This package contains all subcommand implementations.
"""

from vaultclean.cli.commands import clean, config, scan

__all__ = ["clean", "config", "scan"]
