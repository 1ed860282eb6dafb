"""Logging configuration for the vaultclean CLI.

Library modules only create loggers; the CLI attaches a Rich handler
to the package logger so warnings land on stderr next to other output.
"""

import logging

from rich.logging import RichHandler

from vaultclean.utils.formatting import err_console

PACKAGE_LOGGER = "vaultclean"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the package logger with a Rich handler.

    Args:
        verbose: Enable DEBUG level logging.
        quiet: Suppress all but ERROR level logging.

    Returns:
        The configured package logger.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=err_console,
            show_time=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
