"""Tests for EnvReader class."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from muxplan.config.env import EnvReader


class TestEnvReaderGetStr:
    """Tests for EnvReader.get_str method."""

    def test_returns_value_when_set(self) -> None:
        reader = EnvReader(env={"MY_VAR": "hello"})
        assert reader.get_str("MY_VAR") == "hello"

    def test_returns_none_when_not_set(self) -> None:
        assert EnvReader(env={}).get_str("MY_VAR") is None

    def test_returns_default_when_not_set(self) -> None:
        assert EnvReader(env={}).get_str("MY_VAR", "default") == "default"

    def test_empty_value_uses_default(self) -> None:
        """An exported but empty variable counts as unset."""
        reader = EnvReader(env={"MY_VAR": ""})
        assert reader.get_str("MY_VAR", "default") == "default"


class TestEnvReaderGetBool:
    """Tests for EnvReader.get_bool method."""

    @pytest.mark.parametrize("value", ["true", "1", "yes", "on", "TRUE", " Yes "])
    def test_true_values(self, value: str) -> None:
        assert EnvReader(env={"MY_VAR": value}).get_bool("MY_VAR") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", "False"])
    def test_false_values(self, value: str) -> None:
        assert EnvReader(env={"MY_VAR": value}).get_bool("MY_VAR", True) is False

    def test_returns_default_when_not_set(self) -> None:
        assert EnvReader(env={}).get_bool("MY_VAR", True) is True

    def test_invalid_value_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        reader = EnvReader(env={"MY_VAR": "maybe"})
        with caplog.at_level(logging.WARNING):
            assert reader.get_bool("MY_VAR", False) is False
        assert "Invalid boolean value for MY_VAR: maybe" in caplog.text


class TestEnvReaderGetPath:
    """Tests for EnvReader.get_path method."""

    def test_existing_path(self, tmp_path: Path) -> None:
        reader = EnvReader(env={"MY_VAR": str(tmp_path)})
        assert reader.get_path("MY_VAR") == tmp_path

    def test_missing_path_returns_default(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        missing = tmp_path / "missing.yaml"
        reader = EnvReader(env={"MY_VAR": str(missing)})
        with caplog.at_level(logging.WARNING):
            assert reader.get_path("MY_VAR") is None
        assert "non-existent path" in caplog.text

    def test_missing_path_allowed(self, tmp_path: Path) -> None:
        missing = tmp_path / "new.log"
        reader = EnvReader(env={"MY_VAR": str(missing)})
        assert reader.get_path("MY_VAR", must_exist=False) == missing

    def test_expands_user(self) -> None:
        reader = EnvReader(env={"MY_VAR": "~/muxplan.log"})
        path = reader.get_path("MY_VAR", must_exist=False)
        assert path == Path("~/muxplan.log").expanduser()

    def test_unset_returns_default(self) -> None:
        default = Path("/etc/muxplan.toml")
        assert EnvReader(env={}).get_path("MY_VAR", default=default) == default
