"""Fixtures for CLI tests."""

import pytest
from click.testing import CliRunner

from muxplan.config import MuxplanConfig


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_obj() -> dict:
    """Context object with a default config and logging setup disabled.

    Leaving the root logger alone keeps caplog working in CLI tests.
    """
    return {"config": MuxplanConfig(), "skip_logging_setup": True}
