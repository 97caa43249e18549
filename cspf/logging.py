"""Logging setup for cspf.

All cspf modules log under the ``cspf`` logger hierarchy through
``get_logger(__name__)``. A single stdout handler is attached to the root
``cspf`` logger at import; path computations report at DEBUG level only.
"""

import logging
import sys
from contextlib import contextmanager
from time import perf_counter
from typing import Any, Iterator, Optional

ROOT_LOGGER_NAME = "cspf"

# True once setup_root_logger() has attached its handler
_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Set up the root cspf logger with a single handler.

    Repeated calls are no-ops until reset_logging() is called.

    Args:
        level: Logging level (default: INFO).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to StreamHandler on stdout).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)

    # Let logs propagate so pytest's caplog can capture them
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits the cspf root configuration.

    Args:
        name: Dotted logger name, normally the calling module's __name__.

    Returns:
        Configured logger instance.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level for all cspf loggers.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
    """
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Emit per-computation SPF and expression DEBUG records."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return all cspf loggers to INFO."""
    set_global_log_level(logging.INFO)


@contextmanager
def debug_timer(logger: logging.Logger, label: str, *args: Any) -> Iterator[None]:
    """Log ``label % args`` with the elapsed wall time when the block completes.

    Nothing is measured unless ``logger`` is enabled for DEBUG. Blocks that
    raise are not reported.

    Example:
        with debug_timer(_logger, "SPF %s -> %s", src, dst):
            ...
    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    start = perf_counter()
    yield
    logger.debug("%s completed in %.3f ms", label % args, (perf_counter() - start) * 1e3)


def reset_logging() -> None:
    """Detach the cspf handler and forget the setup, so tests start clean."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
