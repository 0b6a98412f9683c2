from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["get_logger", "enable_debug"]

_ROOT_LOGGER_NAME = "clibase"


def _root_logger() -> logging.Logger:
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if not logger.handlers:
        # Console without a fixed file follows sys.stderr redirection.
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``clibase`` or ``clibase.<name>``."""
    root = _root_logger()
    return root.getChild(name) if name else root


def enable_debug() -> None:
    """Switch the ``clibase`` namespace to DEBUG (used by ``--verbose``)."""
    _root_logger().setLevel(logging.DEBUG)
