"""Shared test fixtures for muxplan."""

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def ffprobe_fixtures_dir() -> Path:
    """Return the path to the ffprobe fixtures directory."""
    return FIXTURES_DIR / "ffprobe"


@pytest.fixture
def policy_fixtures_dir() -> Path:
    """Return the path to the policy fixtures directory."""
    return FIXTURES_DIR / "policies"


def load_ffprobe_fixture(name: str) -> dict:
    """Load an ffprobe JSON fixture by name.

    Args:
        name: Name of the fixture file (without .json extension).

    Returns:
        Parsed JSON data from the fixture.
    """
    fixture_path = FIXTURES_DIR / "ffprobe" / f"{name}.json"
    return json.loads(fixture_path.read_text())


@pytest.fixture
def multi_audio_fixture() -> dict:
    """German 5.1 + stale German stereo + English 5.1/2.0, PGS/SRT subs."""
    return load_ffprobe_fixture("multi_audio")


@pytest.fixture
def subtitle_heavy_fixture() -> dict:
    """Japanese audio with forced, full, SDH, foreign and commentary subs."""
    return load_ffprobe_fixture("subtitle_heavy")


@pytest.fixture
def hdr_4k_fixture() -> dict:
    """UHD HDR10 video with cover art, 7.1 + 5.1 audio, untagged attachment."""
    return load_ffprobe_fixture("hdr_4k")


@pytest.fixture
def missing_metadata_fixture() -> dict:
    """Streams without tags, dimensions or channel counts."""
    return load_ffprobe_fixture("missing_metadata")


def _make_stream(index: int, codec_type: str, **fields) -> dict:
    """Build an ffprobe stream dict.

    language, title, default and forced are moved into tags/disposition.
    """
    tags = {}
    for key in ("language", "title", "mimetype", "filename"):
        if key in fields:
            tags[key] = fields.pop(key)
    disposition = {
        "default": int(fields.pop("default", False)),
        "forced": int(fields.pop("forced", False)),
        "attached_pic": int(fields.pop("attached_pic", False)),
    }
    stream = {
        "index": index,
        "codec_type": codec_type,
        "disposition": disposition,
        **fields,
    }
    if tags:
        stream["tags"] = tags
    return stream


def _make_probe(*streams: dict) -> dict:
    """Wrap stream dicts into an ffprobe report."""
    return {"streams": list(streams)}


@pytest.fixture
def make_stream():
    """Factory for ffprobe stream dicts."""
    return _make_stream


@pytest.fixture
def make_probe():
    """Factory for ffprobe reports."""
    return _make_probe
