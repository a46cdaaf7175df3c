"""Logging setup for release-prep.

Library modules log through ``logging.getLogger(__name__)``; the command line
attaches a single rich handler to the package logger on stderr.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "release_prep"


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Configure the package logger. Safe to call more than once."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    while logger.handlers:
        handler = logger.handlers.pop()
        handler.close()
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
