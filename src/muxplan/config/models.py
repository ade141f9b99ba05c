"""Configuration data models.

Plain mutable dataclasses filled in by muxplan.config.loader; the policy
itself lives in muxplan.policy and is loaded separately.
"""

from dataclasses import dataclass, field
from pathlib import Path

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMATS = ("text", "json")
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    level: str = "info"
    """One of LOG_LEVELS, case-insensitive."""

    file: Path | None = None
    """Rotating log file; None logs to stderr only."""

    format: str = "text"
    """One of LOG_FORMATS."""

    include_stderr: bool = False
    """Also log to stderr when file is set."""

    max_bytes: int = DEFAULT_LOG_MAX_BYTES
    backup_count: int = 5

    def __post_init__(self) -> None:
        if self.level.lower() not in LOG_LEVELS:
            raise ValueError(
                f"level must be one of {', '.join(LOG_LEVELS)}, got {self.level}"
            )
        if self.format.lower() not in LOG_FORMATS:
            raise ValueError(
                f"format must be one of {', '.join(LOG_FORMATS)}, got {self.format}"
            )
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must be non-negative, got {self.backup_count}"
            )


@dataclass
class DefaultsConfig:
    """Defaults for `muxplan plan` when no CLI option overrides them."""

    policy_path: Path | None = None
    """Policy YAML file; None uses the built-in policy."""

    transcode_video: bool = True
    """False stream-copies the video track."""


@dataclass
class MuxplanConfig:
    """Main configuration container for muxplan."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
