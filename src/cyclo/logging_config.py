"""
Logging configuration for cyclo.

Records go to the ``cyclo`` logger only. The terminal gets a rich handler
whose level follows ``--verbose``/``--quiet``; an optional log file gets
every record down to DEBUG, so a quiet run can still leave the per-file
scan trail behind.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "cyclo"
LOG_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _console_level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach cyclo's handlers, replacing any from an earlier call.

    Args:
        verbose: Show DEBUG records on the terminal
        quiet: Show only ERROR records on the terminal
        log_file: Append all records (DEBUG and up) to this file

    Returns:
        The ``cyclo`` logger
    """
    console_level = _console_level(verbose, quiet)

    console_handler = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if log_file else console_level)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``cyclo`` namespace.

    Args:
        name: Module name (e.g., 'cyclo.scanning.lexer').
              If None, returns the root cyclo logger
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)

    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
