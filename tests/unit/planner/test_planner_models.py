"""Unit tests for planner data models."""

from muxplan.planner.models import (
    AttachmentPlan,
    AudioPlanEntry,
    AudioTrackPlan,
    ColorMetadata,
    FilterGraphSegment,
    SubtitlePlanEntry,
    SubtitleTrackPlan,
    VideoPlan,
)


class TestFilterGraphSegment:
    """Tests for FilterGraphSegment."""

    def test_expression(self):
        segment = FilterGraphSegment("[0:1]", ("a=1", "b=2"), "[out]")
        assert segment.expression == "[0:1]a=1,b=2[out]"


class TestColorMetadata:
    """Tests for ColorMetadata."""

    def test_without_chroma_location(self):
        color = ColorMetadata("bt2020", "arib-std-b67", "bt2020nc")
        assert color.args() == [
            ("-color_primaries", "bt2020"),
            ("-color_trc", "arib-std-b67"),
            ("-colorspace", "bt2020nc"),
        ]


class TestVideoPlan:
    """Tests for VideoPlan.args."""

    def test_sdr_args(self):
        plan = VideoPlan(
            source_index=0,
            map_spec="0:0",
            codec="libsvtav1",
            crf=22,
            preset="5",
            pixel_format="yuv420p10le",
            encoder_params="film-grain=12",
        )
        assert plan.args() == [
            ("-c:v", "libsvtav1"),
            ("-preset", "5"),
            ("-pix_fmt", "yuv420p10le"),
            ("-crf", "22"),
            ("-svtav1-params", "film-grain=12"),
        ]

    def test_params_flag_follows_encoder(self):
        plan = VideoPlan(0, "0:0", "libx265", crf=20, encoder_params="aq-mode=3")
        assert ("-x265-params", "aq-mode=3") in plan.args()


class TestDispositions:
    """Tests for track dispositions."""

    def _audio_entry(self):
        return AudioPlanEntry(1, False, "ger", 6, "0:1", "GER 5.1")

    def test_audio(self):
        entry = self._audio_entry()
        assert AudioTrackPlan(entry, "copy", is_default=True).disposition == "default"
        assert AudioTrackPlan(entry, "copy").disposition == "0"

    def test_subtitle(self):
        forced = SubtitlePlanEntry(2, "ger", True, "GER Forced")
        full = SubtitlePlanEntry(3, "eng", False, "ENG Full")

        assert SubtitleTrackPlan(forced, is_default=True).disposition == (
            "default+forced"
        )
        assert SubtitleTrackPlan(forced).disposition == "forced"
        assert SubtitleTrackPlan(full, is_default=True).disposition == "default"
        assert SubtitleTrackPlan(full).disposition == "0"


def test_attachment_plan_defaults():
    assert AttachmentPlan().copy_metadata is False
    assert AttachmentPlan(indices=(5,)).copy_metadata is True
