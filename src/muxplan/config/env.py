"""Typed access to MUXPLAN_* environment variables.

Tests pass an explicit mapping to EnvReader instead of patching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

_BOOL_VALUES: dict[str, bool] = {
    "true": True,
    "1": True,
    "yes": True,
    "on": True,
    "false": False,
    "0": False,
    "no": False,
    "off": False,
}


class EnvReader:
    """Read environment variables, converting and validating their values.

    Empty values count as unset. A value that cannot be converted is
    logged and replaced by the caller's default, so a bad variable never
    stops the CLI.

    Example:
        reader = EnvReader(env={"MUXPLAN_TRANSCODE_VIDEO": "no"})
        reader.get_bool("MUXPLAN_TRANSCODE_VIDEO", True)  # False
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def _raw(self, var: str) -> str | None:
        value = self._env.get(var)
        return value if value else None

    def get_str(self, var: str, default: str | None = None) -> str | None:
        value = self._raw(var)
        return default if value is None else value

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean (true/1/yes/on or false/0/no/off, any case)."""
        value = self._raw(var)
        if value is None:
            return default
        try:
            return _BOOL_VALUES[value.strip().lower()]
        except KeyError:
            logger.warning("Invalid boolean value for %s: %s", var, value)
            return default

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Get a user-expanded path.

        With must_exist, a path that does not exist is logged and default
        is returned instead.
        """
        value = self._raw(var)
        if value is None:
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning("%s points to non-existent path: %s", var, value)
            return default
        return path
