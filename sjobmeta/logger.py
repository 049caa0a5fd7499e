"""Logging configuration using loguru.

Logs are stored in the logs/ folder and kept for 1 week.
Output goes to file only by default so that stderr carries nothing but
user-facing diagnostics.
"""

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    import loguru

# Remove default handler
logger.remove()

# Define log directory (default ~/.local/share/sjobmeta/logs, overridable via SJOBMETA_LOG_DIR)
_default_log_dir = Path.home() / ".local" / "share" / "sjobmeta" / "logs"
LOG_DIR = Path(os.environ.get("SJOBMETA_LOG_DIR", str(_default_log_dir))).expanduser().resolve()
LOG_DIR.mkdir(parents=True, exist_ok=True)


class _LoggingState:
    """Internal state tracker for the optional stderr handler."""

    def __init__(self) -> None:
        """Initialize logging state without a stderr handler."""
        self.stderr_handler_id: int | None = None


_state = _LoggingState()

# Configure file handler with rotation and retention
logger.add(
    LOG_DIR / "sjobmeta_{time:YYYY-MM-DD}.log",
    level="DEBUG",
    format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    rotation="00:00",  # New file at midnight
    retention="1 week",  # Keep logs for 1 week
    compression="gz",  # Compress old logs
    backtrace=True,
    diagnose=False,
)


def get_logger(name: str) -> "loguru.Logger":
    """Get a logger instance with the given name.

    Args:
        name: The name for the logger (typically __name__).

    Returns:
        A configured logger instance.
    """
    return logger.bind(name=name)


def enable_verbose() -> int:
    """Echo selected log records to stderr as bare messages.

    Only records bound with ``echo=True`` reach stderr, so ``--verbose``
    shows each sacct invocation without the rest of the debug chatter.
    Calling it twice replaces the previous handler.

    Returns:
        The sink ID of the stderr handler.
    """
    disable_verbose()
    _state.stderr_handler_id = logger.add(
        sys.stderr,
        level="DEBUG",
        format="{message}",
        colorize=False,
        filter=lambda record: bool(record["extra"].get("echo")),
    )
    return _state.stderr_handler_id


def disable_verbose() -> None:
    """Remove the stderr handler if one is installed."""
    if _state.stderr_handler_id is not None:
        logger.remove(_state.stderr_handler_id)
        _state.stderr_handler_id = None
