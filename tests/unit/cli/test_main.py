"""Unit tests for the top-level CLI application."""

import logging

from typer.testing import CliRunner
from vaultclean import __version__
from vaultclean.cli.main import app

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"vaultclean version {__version__}" in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without a command prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output
        assert "scan" in result.output
        assert "clean" in result.output

    def test_verbose_enables_debug_logging(self) -> None:
        """--verbose sets the package logger to DEBUG."""
        runner.invoke(app, ["--verbose", "config", "path"])

        assert logging.getLogger("vaultclean").level == logging.DEBUG

    def test_quiet_limits_logging_to_errors(self) -> None:
        """--quiet sets the package logger to ERROR."""
        runner.invoke(app, ["--quiet", "config", "path"])

        assert logging.getLogger("vaultclean").level == logging.ERROR
