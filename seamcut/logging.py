"""Centralized logging configuration for SeamCut.

All package loggers are children of the ``seamcut`` logger, which owns the only
handler. Besides the level switches this module provides the verbosity mapping
used by the command line and `log_phase`, which times one pipeline stage.
"""

import logging
import sys
from contextlib import contextmanager
from time import perf_counter
from typing import Dict, Iterator, Optional

# Set once the seamcut logger has its handler
_ROOT_LOGGER_CONFIGURED = False

ROOT_LOGGER_NAME = "seamcut"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the single handler to the ``seamcut`` logger.

    Repeated calls do nothing until ``reset_logging()`` runs.

    Args:
        level: Logging level (default: INFO).
        format_string: Custom format string; defaults to `DEFAULT_FORMAT`.
        handler: Custom handler; defaults to a StreamHandler on stdout.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # pytest's caplog listens on the Python root logger
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger that defers to the ``seamcut`` logger's level.

    Args:
        name: Logger name, normally ``__name__``.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``seamcut`` logger and its handlers."""
    setup_root_logger()
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def verbosity_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map command-line verbosity flags to a logging level.

    ``verbose`` wins when both flags are set.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_verbosity(verbose: bool = False, quiet: bool = False) -> int:
    """Apply `verbosity_level` globally and return the chosen level."""
    level = verbosity_level(verbose, quiet)
    set_global_log_level(level)
    return level


@contextmanager
def log_phase(
    logger: logging.Logger, name: str, timings: Optional[Dict[str, float]] = None
) -> Iterator[None]:
    """Time the enclosed block as pipeline phase ``name``.

    Logs the start at DEBUG and the elapsed seconds at INFO, and stores them in
    ``timings[name]`` when a dict is given. Nothing is logged or stored when
    the block raises.
    """
    logger.debug(f"Phase '{name}' started")
    start = perf_counter()
    yield
    elapsed = perf_counter() - start
    if timings is not None:
        timings[name] = elapsed
    logger.info(f"Phase '{name}' finished in {elapsed:.3f} s")


def reset_logging() -> None:
    """Drop the handler and level so the next setup starts fresh (for tests)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


# Configure on import so module loggers work without explicit setup
setup_root_logger()
