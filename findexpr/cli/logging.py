"""
CLI logging setup.

Library modules only log through `logging.getLogger(__name__)`; the CLI decides
where those records go. Logs always go to stderr so stdout stays parseable.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "findexpr"


@dataclass(frozen=True, slots=True)
class LoggingState:
    level: int
    handlers: tuple[logging.Handler, ...]
    propagate: bool


def _level_for(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, verbosity: int) -> LoggingState:
    """Route `findexpr` logs to stderr; returns the state to restore on exit."""
    logger = logging.getLogger(_LOGGER_NAME)
    previous = LoggingState(
        level=logger.level,
        handlers=tuple(logger.handlers),
        propagate=logger.propagate,
    )

    handler = RichHandler(
        console=Console(file=sys.stderr, force_terminal=False),
        show_time=False,
        show_path=verbosity >= 2,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(_level_for(verbosity))
    logger.propagate = False
    return previous


def restore_logging(previous: LoggingState) -> None:
    logger = logging.getLogger(_LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    for handler in previous.handlers:
        logger.addHandler(handler)
    logger.setLevel(previous.level)
    logger.propagate = previous.propagate
