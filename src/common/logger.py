"""Logging utilities with rich output for the harvester CLI.

This module combines Python's standard logging with rich's console output.
Every module gets its logger through here so scan progress, skipped files and
store failures all render the same way.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Scanning /mnt/us/Books...")
    logger.warning("Cannot list directory, skipping")
    logger.error("Failed to write quote store", exc_info=True)
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# Global console instances for consistent output
console = Console()
err_console = Console(stderr=True)

# Names handed out by get_logger, so setup_logging can re-level them
_managed: set[str] = set()


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    """Build a RichHandler bound to the shared console."""
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        tracebacks_show_locals=True,
        markup=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to INFO.
        show_time: Show timestamp in log output
        show_path: Show file path in log output

    Returns:
        Configured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("12 highlights found")
        12 highlights found
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    logger.setLevel(level.upper())
    _managed.add(name)
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # Let pytest's caplog see records
    logger.propagate = True

    return logger


def _has_own_handler(record: logging.LogRecord) -> bool:
    return bool(logging.getLogger(record.name).handlers)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once at the CLI entry point.

    Loggers from get_logger already print through their own handler, so the
    root handler only renders records from everything else.

    Args:
        level: Default logging level for all modules
    """
    level = os.getenv("LOG_LEVEL", level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = _rich_handler()
    handler.addFilter(lambda record: not _has_own_handler(record))
    root_logger.addHandler(handler)

    for name in _managed:
        logging.getLogger(name).setLevel(level)


def progress(message: str) -> None:
    """Print a progress line without the logger prefix.

    Example:
        >>> progress("Scanning: dune.sdr")
        Scanning: dune.sdr
    """
    console.print(message)


def success(message: str) -> None:
    """Print a success line with a green checkmark.

    Example:
        >>> success("3 highlights found and saved.")
        ✓ 3 highlights found and saved.
    """
    console.print(f"[green]✓[/green] {message}")


def warning(message: str) -> None:
    """Print a warning line with a yellow icon."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def error(message: str) -> None:
    """Print an error line with a red X to stderr."""
    err_console.print(f"[red]✗[/red] {message}")
