"""Structured logging module for muxplan.

Provides configurable logging with JSON format support and file rotation,
plus per-file context for hosts compiling many files concurrently.
"""

from muxplan.logging.config import configure_logging
from muxplan.logging.context import FileContextFilter, file_context, get_file_context
from muxplan.logging.handlers import JSONFormatter

__all__ = [
    "FileContextFilter",
    "JSONFormatter",
    "configure_logging",
    "file_context",
    "get_file_context",
]
