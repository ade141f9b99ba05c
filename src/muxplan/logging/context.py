"""Per-file context for structured logging.

A batch host may compile many files at once, each in its own thread or
task. file_context() stores the file being compiled in a contextvar, and
FileContextFilter copies it onto every log record emitted meanwhile.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


def get_file_context() -> str | None:
    """Return the file path of the current context, or None."""
    return _file_path.get()


@contextmanager
def file_context(file_path: Path | str | None) -> Generator[None, None, None]:
    """Tag log records emitted inside the block with file_path.

    Restores the previous value on exit, so contexts nest.

    Example:
        with file_context("/media/movie.mkv"):
            logger.info("Compiling")  # record.file_path == "/media/movie.mkv"
    """
    token = _file_path.set(str(file_path) if file_path is not None else None)
    try:
        yield
    finally:
        _file_path.reset(token)


class FileContextFilter(logging.Filter):
    """Logging filter that injects the current file into log records.

    Adds file_path for JSON output and a file_tag ("[movie.mkv] ") for the
    text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        file_path = get_file_context()
        record.file_path = file_path
        record.file_tag = f"[{Path(file_path).name}] " if file_path else ""
        return True  # Never filter out records
