"""Root logger setup for the muxplan CLI.

configure_logging() installs one formatter on up to two handlers: a
rotating log file and stderr. Library code only ever calls
logging.getLogger(__name__); hosts embedding muxplan configure logging
themselves.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from muxplan.logging.context import FileContextFilter
from muxplan.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from muxplan.config.models import LoggingConfig

TEXT_FORMAT = "%(asctime)s - %(file_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _make_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def _open_log_file(config: LoggingConfig) -> RotatingFileHandler | None:
    """Open the rotating log file, or return None if it cannot be created."""
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        # Logging is not set up yet, so report on stderr directly
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from a LoggingConfig.

    Replaces any existing root handlers. stderr is used when
    include_stderr is set, and as a fallback when no log file is
    configured or it cannot be opened.

    Args:
        config: Logging configuration (already validated).
    """
    level = logging.getLevelName(config.level.upper())
    formatter = _make_formatter(config)
    context_filter = FileContextFilter()

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)
