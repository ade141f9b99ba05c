"""Unit tests for output track ordering."""

from muxplan.planner.models import AudioPlanEntry, SubtitlePlanEntry
from muxplan.planner.sorting import (
    language_score,
    sort_audio_entries,
    sort_subtitle_entries,
)
from muxplan.policy import LanguagePolicy


def entry(index, language, channels, generated=False):
    label = f"[aud_norm_{index}]" if generated else f"0:{index}"
    return AudioPlanEntry(
        source_index=index,
        is_generated=generated,
        language=language,
        channels=channels,
        map_label=label,
        title=f"{language} {channels}",
    )


def sub_entry(index, language, is_forced=False):
    return SubtitlePlanEntry(
        source_index=index, language=language, is_forced=is_forced, title=""
    )


class TestLanguageScore:
    """Tests for language_score function."""

    def test_scores(self):
        policy = LanguagePolicy()
        assert language_score("ger", policy) == 1
        assert language_score("de", policy) == 1
        assert language_score("eng", policy) == 2
        assert language_score("jpn", policy) == 3
        assert language_score("und", policy) == 3


class TestSortAudioEntries:
    """Tests for sort_audio_entries function."""

    def test_language_then_channels(self):
        entries = [
            entry(1, "jpn", 6),
            entry(2, "eng", 2),
            entry(3, "ger", 2),
            entry(4, "eng", 6),
            entry(5, "ger", 6),
        ]
        result = sort_audio_entries(entries)
        assert [e.source_index for e in result] == [5, 3, 4, 2, 1]

    def test_original_before_generated_stereo(self):
        entries = [entry(1, "ger", 2, generated=True), entry(1, "ger", 6)]
        result = sort_audio_entries(entries)
        assert [e.is_generated for e in result] == [False, True]

    def test_stable_for_equal_keys(self):
        """Swapping two entries with equal keys swaps them in the output."""
        a, b = entry(1, "eng", 2), entry(2, "eng", 2)
        other = entry(3, "ger", 6)

        assert sort_audio_entries([a, other, b]) == [other, a, b]
        assert sort_audio_entries([b, other, a]) == [other, b, a]

    def test_input_not_mutated(self):
        entries = [entry(1, "eng", 2), entry(2, "ger", 2)]
        sort_audio_entries(entries)
        assert [e.source_index for e in entries] == [1, 2]


class TestSortSubtitleEntries:
    """Tests for sort_subtitle_entries function."""

    def test_language_then_forced(self):
        entries = [
            sub_entry(1, "eng"),
            sub_entry(2, "eng", is_forced=True),
            sub_entry(3, "jpn"),
            sub_entry(4, "ger"),
            sub_entry(5, "ger", is_forced=True),
        ]
        result = sort_subtitle_entries(entries)
        assert [e.source_index for e in result] == [5, 4, 2, 1, 3]

    def test_stable_for_equal_keys(self):
        a, b = sub_entry(1, "eng"), sub_entry(2, "eng")
        assert sort_subtitle_entries([a, b]) == [a, b]
        assert sort_subtitle_entries([b, a]) == [b, a]
