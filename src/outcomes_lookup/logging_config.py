"""
Logging for outcomes-lookup.

Only the ``outcomes_lookup`` logger is configured; the root logger and other
libraries' loggers are left alone. Records go to stderr through rich so
stdout carries nothing but outcome rows.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT = "outcomes_lookup"

# Handler installed by the last setup_logging() call.
_handler: Optional[logging.Handler] = None


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Point the package logger at a rich handler on stderr.

    Calling it again replaces the previous handler, so the level follows the
    latest flags and records are never emitted twice.

    Args:
        verbose: DEBUG level, with source paths and tracebacks showing locals
        quiet: ERROR level; wins over ``verbose``

    Returns:
        The ``outcomes_lookup`` logger
    """
    global _handler

    level = _level_for(verbose, quiet)
    logger = logging.getLogger(_ROOT)

    if _handler is not None:
        logger.removeHandler(_handler)

    # Datastore messages can contain [brackets]; keep them literal.
    _handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        markup=False,
        show_path=verbose,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%X]",
    )
    logger.addHandler(_handler)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``outcomes_lookup`` namespace.

    ``get_logger(__name__)`` from inside the package returns the module's own
    logger; any other name is nested below the package logger.
    """
    if name is None:
        return logging.getLogger(_ROOT)

    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"

    return logging.getLogger(name)
