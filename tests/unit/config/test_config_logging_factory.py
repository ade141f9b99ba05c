"""Tests for logging_factory module."""

from __future__ import annotations

from pathlib import Path

import pytest

from muxplan.config.logging_factory import build_logging_config
from muxplan.config.models import LoggingConfig


class TestBuildLoggingConfig:
    """Tests for build_logging_config function."""

    @pytest.fixture
    def base_config(self) -> LoggingConfig:
        return LoggingConfig(
            level="info",
            file=Path("/var/log/muxplan.log"),
            format="text",
            include_stderr=True,
            max_bytes=1_000_000,
            backup_count=3,
        )

    def test_no_overrides(self, base_config: LoggingConfig) -> None:
        assert build_logging_config(base_config) == base_config

    def test_overrides_level_and_format(self, base_config: LoggingConfig) -> None:
        result = build_logging_config(base_config, level="debug", format="json")

        assert result.level == "debug"
        assert result.format == "json"
        assert result.file == base_config.file

    def test_overrides_file(self, base_config: LoggingConfig) -> None:
        result = build_logging_config(base_config, file=Path("/tmp/other.log"))
        assert result.file == Path("/tmp/other.log")

    def test_false_include_stderr_applies(self, base_config: LoggingConfig) -> None:
        """False is an override, not a missing value."""
        result = build_logging_config(base_config, include_stderr=False)
        assert result.include_stderr is False

    def test_rotation_settings_preserved(self, base_config: LoggingConfig) -> None:
        result = build_logging_config(base_config, level="error")
        assert result.max_bytes == 1_000_000
        assert result.backup_count == 3

    def test_invalid_override_raises(self, base_config: LoggingConfig) -> None:
        with pytest.raises(ValueError):
            build_logging_config(base_config, level="loud")
