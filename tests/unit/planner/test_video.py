"""Unit tests for video encode parameter selection."""

import pytest

from muxplan.domain import HDRType, VideoStream
from muxplan.planner.models import ColorMetadata
from muxplan.planner.video import (
    detect_animation,
    detect_hdr_type,
    select_crf_tier,
    select_primary_video_stream,
    select_video_parameters,
)
from muxplan.policy import DEFAULT_CRF_TIERS, VideoPolicy

POLICY = VideoPolicy()
BASE = "tune=0:enable-overlays=1:scd=1"


def video(index=0, width=1920, height=1080, transfer=None, **fields):
    return VideoStream(
        index=index, width=width, height=height, color_transfer=transfer, **fields
    )


def hdr_video(width=3840, height=2160, **fields):
    return video(
        width=width,
        height=height,
        transfer="smpte2084",
        color_primaries="bt2020",
        color_space="bt2020nc",
        **fields,
    )


class TestSelectPrimaryVideoStream:
    """Tests for select_primary_video_stream function."""

    def test_skips_cover_art(self):
        streams = [video(0, is_attached_pic=True), video(1)]
        primary, warnings = select_primary_video_stream(streams)

        assert primary.index == 1
        assert warnings == []

    def test_no_video(self):
        primary, warnings = select_primary_video_stream([])

        assert primary is None
        assert warnings == ["No video stream found, mapping all video with 0:v"]

    def test_only_cover_art(self):
        primary, _ = select_primary_video_stream([video(0, is_attached_pic=True)])
        assert primary is None


class TestDetectHdrType:
    """Tests for detect_hdr_type function."""

    @pytest.mark.parametrize(
        ("transfer", "expected"),
        [
            ("smpte2084", HDRType.HDR10),
            ("arib-std-b67", HDRType.HLG),
            ("bt709", HDRType.NONE),
            (None, HDRType.NONE),
        ],
    )
    def test_transfer(self, transfer, expected):
        assert detect_hdr_type(video(transfer=transfer)) == expected

    def test_no_stream(self):
        assert detect_hdr_type(None) == HDRType.NONE


class TestDetectAnimation:
    """Tests for detect_animation function."""

    def test_keyword_in_path(self):
        keywords = POLICY.animation_keywords
        assert detect_animation("/media/Anime/Show/S01E01.mkv", keywords) is True
        assert detect_animation("/media/Cartoons/x.mkv", keywords) is True

    def test_no_keyword(self):
        assert detect_animation("/media/Movies/x.mkv", ("anime",)) is False

    def test_no_path(self):
        assert detect_animation(None, ("anime",)) is False


class TestSelectCrfTier:
    """Tests for select_crf_tier function."""

    @pytest.mark.parametrize(
        ("pixels", "name"),
        [
            (3840 * 2160, "uhd"),
            (5_000_000, "uhd"),
            (1920 * 1080, "hd"),
            (1_000_000, "hd"),
            (1280 * 720, "sd"),
            (0, "sd"),
        ],
    )
    def test_tiers(self, pixels, name):
        assert select_crf_tier(pixels, DEFAULT_CRF_TIERS).name == name


class TestSelectVideoParameters:
    """Tests for select_video_parameters function."""

    def test_sdr_hd(self):
        plan, warnings = select_video_parameters([video()], False, True, POLICY)

        assert plan.source_index == 0
        assert plan.map_spec == "0:0"
        assert plan.codec == "libsvtav1"
        assert plan.crf == 22
        assert plan.tier == "hd"
        assert plan.filters == ()
        assert plan.color is None
        assert plan.encoder_params == f"{BASE}:film-grain=12"
        assert plan.is_hdr is False
        assert warnings == []

    def test_sdr_uhd(self):
        plan, _ = select_video_parameters(
            [video(width=3840, height=2160)], False, True, POLICY
        )

        assert plan.crf == 23
        assert plan.encoder_params == f"{BASE}:film-grain=10"

    def test_sd(self):
        plan, _ = select_video_parameters(
            [video(width=1280, height=720)], False, True, POLICY
        )
        assert plan.crf == 28
        assert plan.tier == "sd"

    def test_hdr_uhd_crf_below_sdr(self):
        """4K HDR uses the HDR CRF of the UHD tier, lower than the SDR one."""
        sdr, _ = select_video_parameters(
            [video(width=3840, height=2160)], False, True, POLICY
        )
        hdr, _ = select_video_parameters([hdr_video()], False, True, POLICY)

        assert hdr.crf == 21
        assert hdr.crf < sdr.crf
        assert hdr.hdr_type == HDRType.HDR10
        assert hdr.filters == ("cas=0.5",)
        assert hdr.encoder_params == f"{BASE}:enable-qm=1:film-grain=8"
        assert hdr.color == ColorMetadata(
            primaries="bt2020",
            transfer="smpte2084",
            space="bt2020nc",
            chroma_location="topleft",
        )

    def test_hdr_hd(self):
        plan, _ = select_video_parameters(
            [hdr_video(width=1920, height=1080)], False, True, POLICY
        )
        assert plan.crf == 20
        assert plan.encoder_params.endswith("film-grain=10")

    def test_hlg_color_defaults(self):
        """Missing primaries and matrix fall back to the BT.2020 defaults."""
        plan, _ = select_video_parameters(
            [video(transfer="arib-std-b67")], False, True, POLICY
        )

        assert plan.hdr_type == HDRType.HLG
        assert plan.color.primaries == "bt2020"
        assert plan.color.transfer == "arib-std-b67"
        assert plan.color.space == "bt2020nc"

    def test_animation_sdr(self):
        plan, _ = select_video_parameters([video()], True, True, POLICY)

        assert plan.crf == 24
        assert plan.filters == ("hqdn3d=1.5:1.5:3:3",)
        assert plan.encoder_params == f"{BASE}:enable-tf=0"
        assert "film-grain" not in plan.encoder_params

    def test_animation_hdr_drops_sharpening(self):
        plan, _ = select_video_parameters([hdr_video()], True, True, POLICY)

        assert plan.crf == 23
        assert plan.filters == ("hqdn3d=1.5:1.5:3:3",)
        assert "cas=0.5" not in plan.filters
        assert plan.color is not None

    def test_copy_mode(self):
        plan, _ = select_video_parameters([hdr_video()], False, False, POLICY)

        assert plan.is_copy
        assert plan.crf is None
        assert plan.filters == ()
        assert plan.encoder_params is None
        assert plan.args() == [("-c:v", "copy")]
        assert plan.is_hdr is True

    def test_no_video_uses_wildcard(self):
        plan, warnings = select_video_parameters([], False, True, POLICY)

        assert plan.map_spec == "0:v"
        assert plan.source_index is None
        assert plan.tier == "hd"
        assert warnings == ["No video stream found, mapping all video with 0:v"]

    def test_missing_dimensions_default_to_1080p(self):
        plan, _ = select_video_parameters(
            [video(width=None, height=None)], False, True, POLICY
        )

        assert (plan.width, plan.height) == (1920, 1080)
        assert plan.crf == 22

    def test_cover_art_not_mapped(self):
        streams = [video(0, width=600, height=900, is_attached_pic=True), video(1)]
        plan, _ = select_video_parameters(streams, False, True, POLICY)
        assert plan.map_spec == "0:1"

    def test_hdr_args_order(self):
        plan, _ = select_video_parameters([hdr_video()], False, True, POLICY)

        assert plan.args() == [
            ("-color_primaries", "bt2020"),
            ("-color_trc", "smpte2084"),
            ("-colorspace", "bt2020nc"),
            ("-chroma_sample_location", "topleft"),
            ("-vf", "cas=0.5"),
            ("-c:v", "libsvtav1"),
            ("-preset", "5"),
            ("-pix_fmt", "yuv420p10le"),
            ("-crf", "21"),
            ("-svtav1-params", f"{BASE}:enable-qm=1:film-grain=8"),
        ]
