"""Unit tests for introspector mapping functions."""

import pytest

from muxplan.domain import StreamKind
from muxplan.introspector.mappings import map_layout_label, map_stream_kind


class TestMapStreamKind:
    """Tests for map_stream_kind function."""

    @pytest.mark.parametrize(
        ("codec_type", "expected"),
        [
            ("video", StreamKind.VIDEO),
            ("audio", StreamKind.AUDIO),
            ("subtitle", StreamKind.SUBTITLE),
            ("attachment", StreamKind.ATTACHMENT),
            ("data", StreamKind.OTHER),
            (None, StreamKind.OTHER),
        ],
    )
    def test_mapping(self, codec_type, expected):
        assert map_stream_kind(codec_type) == expected


class TestMapLayoutLabel:
    """Tests for map_layout_label function."""

    @pytest.mark.parametrize(
        ("channels", "expected"),
        [(1, "1.0"), (2, "2.0"), (6, "5.1"), (8, "7.1")],
    )
    def test_known_layouts(self, channels, expected):
        assert map_layout_label(channels) == expected

    def test_unknown_layout_uses_channel_count(self):
        assert map_layout_label(4) == "4ch"
        assert map_layout_label(5) == "5ch"
