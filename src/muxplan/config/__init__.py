"""Configuration management for muxplan.

Precedence:
1. CLI flags (highest priority)
2. Environment variables (MUXPLAN_*)
3. Config file (~/.muxplan/config.toml)
4. Default values (lowest priority)
"""

from muxplan.config.env import EnvReader
from muxplan.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from muxplan.config.logging_factory import build_logging_config
from muxplan.config.models import DefaultsConfig, LoggingConfig, MuxplanConfig

__all__ = [
    "DefaultsConfig",
    "EnvReader",
    "LoggingConfig",
    "MuxplanConfig",
    "build_logging_config",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
