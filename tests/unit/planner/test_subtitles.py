"""Unit tests for subtitle filtering, deduplication and renaming."""

import logging

from muxplan.domain import SubtitleStream
from muxplan.planner.models import DropReason
from muxplan.planner.subtitles import (
    build_image_registry,
    filter_subtitles,
    plan_subtitles,
    subtitle_title,
)
from muxplan.policy import SubtitlePolicy

POLICY = SubtitlePolicy()
PGS = "hdmv_pgs_subtitle"


def sub(index, language, codec=PGS, is_forced=False, title=""):
    return SubtitleStream(
        index=index,
        codec_name=codec,
        language=language,
        is_forced=is_forced,
        title=title,
    )


class TestFilterSubtitles:
    """Tests for filter_subtitles function."""

    def test_pgs_beats_srt_duplicate(self):
        """English PGS forced + English SRT forced: only the PGS survives."""
        subs = [
            sub(2, "eng", PGS, is_forced=True),
            sub(3, "eng", "subrip", is_forced=True),
        ]
        result = filter_subtitles(subs, POLICY)

        assert result.kept_indices == (2,)
        assert result.dropped == ((3, DropReason.DUPLICATE),)

    def test_srt_before_pgs_still_dropped(self):
        """The registry covers every stream, not just earlier ones."""
        subs = [
            sub(2, "eng", "subrip", is_forced=True),
            sub(3, "eng", PGS, is_forced=True),
        ]
        assert filter_subtitles(subs, POLICY).kept_indices == (3,)

    def test_different_forced_flag_not_duplicate(self):
        subs = [sub(2, "eng", PGS, is_forced=True), sub(3, "eng", "subrip")]
        assert filter_subtitles(subs, POLICY).kept_indices == (2, 3)

    def test_title_not_part_of_key(self):
        subs = [
            sub(2, "eng", PGS, title="Full"),
            sub(3, "eng", "subrip", title="Completely different"),
        ]
        assert filter_subtitles(subs, POLICY).kept_indices == (2,)

    def test_non_text_codec_not_deduplicated(self):
        """Only text codecs from the policy are dropped as duplicates."""
        subs = [sub(2, "eng", PGS), sub(3, "eng", "ass")]
        assert filter_subtitles(subs, POLICY).kept_indices == (2, 3)

    def test_language_filter(self):
        subs = [sub(2, "fre"), sub(3, "und"), sub(4, "jpn")]
        result = filter_subtitles(subs, POLICY)

        assert result.kept_indices == (3, 4)
        assert result.dropped == ((2, DropReason.LANGUAGE),)

    def test_commentary_filter(self):
        subs = [sub(2, "eng", "subrip", title="Director's COMMENTARY")]
        result = filter_subtitles(subs, POLICY)

        assert result.kept == ()
        assert result.dropped == ((2, DropReason.COMMENTARY),)

    def test_dropped_image_still_registers(self):
        """A PGS commentary track that is dropped still shadows matching SRTs."""
        subs = [sub(2, "eng", PGS, title="commentary"), sub(3, "eng", "subrip")]
        result = filter_subtitles(subs, POLICY)

        assert result.kept == ()

    def test_source_order_preserved(self):
        subs = [sub(5, "ger", "subrip"), sub(2, "eng", "subrip")]
        assert filter_subtitles(subs, POLICY).kept_indices == (5, 2)

    def test_duplicate_logged(self, caplog):
        subs = [sub(2, "eng", PGS), sub(3, "eng", "subrip")]
        with caplog.at_level(logging.INFO):
            filter_subtitles(subs, POLICY)
        assert "Removing duplicate text subtitle 3" in caplog.text

    def test_no_surviving_pair_shares_key(self):
        """No PGS/SRT pair with the same (language, forced) survives."""
        subs = [
            sub(i, lang, codec, is_forced=forced)
            for i, (lang, codec, forced) in enumerate(
                [
                    ("eng", PGS, True),
                    ("eng", "subrip", True),
                    ("eng", "subrip", False),
                    ("ger", "subrip", True),
                    ("ger", PGS, True),
                    ("ger", PGS, False),
                    ("ger", "srt", False),
                ]
            )
        ]
        kept = filter_subtitles(subs, POLICY).kept
        image_keys = {s.registry_key for s in kept if s.codec_name == PGS}
        text_keys = {s.registry_key for s in kept if s.codec_name != PGS}

        assert image_keys.isdisjoint(text_keys)
        assert [s.index for s in kept] == [0, 2, 4, 5]


class TestBuildImageRegistry:
    """Tests for build_image_registry function."""

    def test_keys(self):
        subs = [sub(2, "eng", PGS, is_forced=True), sub(3, "ger", "subrip")]
        assert build_image_registry(subs, POLICY) == {("eng", True)}


class TestSubtitleTitle:
    """Tests for subtitle_title function."""

    def test_forced(self):
        assert subtitle_title(sub(2, "ger", is_forced=True), POLICY) == "GER Forced"

    def test_full(self):
        assert subtitle_title(sub(2, "eng"), POLICY) == "ENG Full"

    def test_sdh_wins_over_forced(self):
        stream = sub(2, "eng", is_forced=True, title="English (SDH)")
        assert subtitle_title(stream, POLICY) == "ENG SDH"

    def test_custom_templates(self):
        policy = SubtitlePolicy(full_title="{lang} (full)")
        assert subtitle_title(sub(2, "jpn"), policy) == "JPN (full)"


def test_plan_subtitles_entries():
    entries = plan_subtitles([sub(4, "ger", is_forced=True), sub(7, "eng")], POLICY)

    assert [(e.source_index, e.title, e.is_forced) for e in entries] == [
        (4, "GER Forced", True),
        (7, "ENG Full", False),
    ]
    assert entries[0].map_label == "0:4"
