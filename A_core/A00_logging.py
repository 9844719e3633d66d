# A_core/A00_logging.py
"""
Centralized logging configuration for the reading-order engine.

Every module obtains its logger through get_logger(__name__) so that all
records land under the "xycut_ordering" namespace. Nothing is configured on
import; applications call configure_logging() once if they want console or
file output.

Usage:
    from A_core.A00_logging import get_logger, timed, LogContext

    logger = get_logger(__name__)
    logger.debug("Horizontal cut at y=412")

    with LogContext(logger, "reading order for report.pdf"):
        ...

    @timed(logger)
    def compute_order(...):
        ...
"""

from __future__ import annotations

import functools
import logging
import sys
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Generator, Optional, TypeVar, Union

F = TypeVar("F", bound=Callable[..., Any])

ROOT_LOGGER_NAME = "xycut_ordering"
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3

# ANSI color codes for console output
COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
    "RESET": "\033[0m",
    "DIM": "\033[2m",
}


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name when writing to a TTY."""

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        use_colors: bool = True,
    ) -> None:
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)
        # Color a copy so file handlers sharing the record stay plain
        colored = logging.makeLogRecord(record.__dict__)
        level_color = COLORS.get(record.levelname, COLORS["RESET"])
        colored.levelname = f"{level_color}{record.levelname}{COLORS['RESET']}"
        colored.name = f"{COLORS['DIM']}{record.name}{COLORS['RESET']}"
        return super().format(colored)


def configure_logging(
    log_level: int = DEFAULT_LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = None,
    enable_console_logging: bool = True,
) -> logging.Logger:
    """
    Configure handlers on the package root logger.

    Calling it again replaces the previously installed handlers.

    Args:
        log_level: Minimum level to emit.
        log_file: Optional path of a rotating log file. Parent directories
            are created when missing.
        enable_console_logging: Whether to write to stdout.

    Returns:
        The configured root logger of the package.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if enable_console_logging:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(
            ColoredFormatter(fmt="%(levelname)-8s | %(message)s", datefmt=DEFAULT_DATE_FORMAT)
        )
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=MAX_LOG_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(fmt=DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the package namespace.

    Args:
        name: Module name, typically __name__.

    Returns:
        Logger named "xycut_ordering.<name>".
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


@contextmanager
def LogContext(
    logger: logging.Logger,
    operation: str,
    level: int = logging.INFO,
) -> Generator[None, None, None]:
    """
    Log the start and end of an operation with its duration.

    Failures are logged at ERROR and re-raised.

    Example:
        >>> with LogContext(logger, "reading order for paper.pdf"):
        ...     analyze_pdf_reading_order("paper.pdf")
        INFO | Starting: reading order for paper.pdf
        INFO | Completed: reading order for paper.pdf (0.12s)
    """
    start_time = time.perf_counter()
    logger.log(level, f"Starting: {operation}")
    try:
        yield
    except Exception as e:
        elapsed = time.perf_counter() - start_time
        logger.error(f"Failed: {operation} ({elapsed:.2f}s) - {type(e).__name__}: {e}")
        raise
    else:
        elapsed = time.perf_counter() - start_time
        logger.log(level, f"Completed: {operation} ({elapsed:.2f}s)")


def timed(
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
) -> Callable[[F], F]:
    """
    Decorator logging how long the wrapped function took.

    Args:
        logger: Logger to use. Defaults to the logger of the function's module.
        level: Log level for the timing message.
    """
    def decorator(func: F) -> F:
        func_logger = logger or get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - start_time
                func_logger.error(f"{func.__name__} failed after {elapsed:.4f}s: {e}")
                raise
            elapsed = time.perf_counter() - start_time
            func_logger.log(level, f"{func.__name__} completed in {elapsed:.4f}s")
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = [
    "ROOT_LOGGER_NAME",
    "ColoredFormatter",
    "configure_logging",
    "get_logger",
    "LogContext",
    "timed",
]
