"""Merge CLI logging options over the configured LoggingConfig."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from muxplan.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return a copy of base with every non-None override applied.

    Rotation settings are never overridden from the command line.
    replace() re-runs LoggingConfig.__post_init__, so an invalid override
    raises ValueError.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(
        base, **{name: value for name, value in overrides.items() if value is not None}
    )
