"""Logging configuration for the ``box_ascii`` logger tree.

Library modules log through ``logging.getLogger(__name__)``; only the
CLI decides where records go.  Records are rendered by Rich on the
stderr console.  Secrets (tokens, client secrets, keys) are never
passed to a logger.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from box_ascii.cli.console import console

_LOGGER_NAME = "box_ascii"


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a Rich handler once and set the level.

    WARNING by default, DEBUG with ``--verbose``.  Safe to call more
    than once.
    """
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
