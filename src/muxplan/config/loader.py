"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (MUXPLAN_*)
3. Config file (~/.muxplan/config.toml)
4. Default values

Environment variables:
- MUXPLAN_CONFIG_PATH: Path to config file (overrides default location)
- MUXPLAN_POLICY_PATH: Policy YAML file used by `muxplan plan`
- MUXPLAN_TRANSCODE_VIDEO: Re-encode video (true/false)
- MUXPLAN_LOG_LEVEL: debug, info, warning or error
- MUXPLAN_LOG_FILE: Log file path
- MUXPLAN_LOG_FORMAT: text or json
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from muxplan.config.env import EnvReader
from muxplan.config.models import (
    DEFAULT_LOG_MAX_BYTES,
    DefaultsConfig,
    LoggingConfig,
    MuxplanConfig,
)
from muxplan.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".muxplan"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(env: EnvReader | None = None) -> Path:
    """Get the config file path, honoring MUXPLAN_CONFIG_PATH."""
    reader = env or EnvReader()
    return reader.get_path(
        "MUXPLAN_CONFIG_PATH", must_exist=False, default=DEFAULT_CONFIG_FILE
    )


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses the default location.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", str(path)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", str(path)) from e

    logger.debug("Loaded config from %s", path)
    return config


def _section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Config section [{name}] must be a table")
    return section


def get_config(
    config_path: Path | None = None,
    env: EnvReader | None = None,
    # CLI overrides (highest precedence)
    policy_path: Path | None = None,
    transcode_video: bool | None = None,
) -> MuxplanConfig:
    """Get muxplan configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MUXPLAN_CONFIG_PATH).
        env: Environment reader; defaults to os.environ.
        policy_path: CLI override for the policy file.
        transcode_video: CLI override for video transcoding.

    Returns:
        MuxplanConfig with merged configuration.

    Raises:
        ConfigError: If the config file is invalid.
    """
    reader = env or EnvReader()
    file_config = load_config_file(config_path or get_default_config_path(reader))

    defaults_file = _section(file_config, "defaults")
    file_policy = defaults_file.get("policy")
    defaults = DefaultsConfig(
        policy_path=(
            policy_path
            or reader.get_path("MUXPLAN_POLICY_PATH")
            or (Path(file_policy).expanduser() if file_policy else None)
        ),
        transcode_video=(
            transcode_video
            if transcode_video is not None
            else reader.get_bool(
                "MUXPLAN_TRANSCODE_VIDEO",
                bool(defaults_file.get("transcode_video", True)),
            )
        ),
    )

    logging_file = _section(file_config, "logging")
    file_log = logging_file.get("file")
    try:
        logging_config = LoggingConfig(
            level=reader.get_str(
                "MUXPLAN_LOG_LEVEL", logging_file.get("level", "info")
            ),
            file=reader.get_path(
                "MUXPLAN_LOG_FILE",
                must_exist=False,
                default=Path(file_log).expanduser() if file_log else None,
            ),
            format=reader.get_str(
                "MUXPLAN_LOG_FORMAT", logging_file.get("format", "text")
            ),
            include_stderr=bool(logging_file.get("include_stderr", False)),
            max_bytes=int(logging_file.get("max_bytes", DEFAULT_LOG_MAX_BYTES)),
            backup_count=int(logging_file.get("backup_count", 5)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid logging configuration: {e}") from e

    return MuxplanConfig(defaults=defaults, logging=logging_config)
