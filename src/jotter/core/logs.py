"""Logging setup for the CLI and the TUI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from textual.logging import TextualHandler

from jotter.core.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings, tui: bool = False) -> None:
    """Route ``jotter`` loggers to stderr (CLI) or to the log file (TUI).

    The TUI owns the terminal, so it never logs to a stream.
    """
    logger = logging.getLogger("jotter")
    logger.setLevel(settings.log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if not tui:
        logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False)
        )
        return

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)
    logger.addHandler(TextualHandler())
