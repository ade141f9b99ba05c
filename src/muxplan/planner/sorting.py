"""Output ordering of audio and subtitle tracks.

Both sorts use Python's stable sorted(), so entries with equal keys keep
their incoming relative order.
"""

from collections.abc import Sequence

from muxplan.planner.models import AudioPlanEntry, SubtitlePlanEntry
from muxplan.policy.types import DEFAULT_POLICY, LanguagePolicy

GERMAN_SCORE = 1
ENGLISH_SCORE = 2
OTHER_SCORE = 3


def language_score(language: str, policy: LanguagePolicy) -> int:
    """Sort score of a language: German family 1, English family 2, else 3."""
    if language in policy.german:
        return GERMAN_SCORE
    if language in policy.english:
        return ENGLISH_SCORE
    return OTHER_SCORE


def sort_audio_entries(
    entries: Sequence[AudioPlanEntry],
    policy: LanguagePolicy = DEFAULT_POLICY.languages,
) -> list[AudioPlanEntry]:
    """Sort by language score, then channel count descending."""
    return sorted(
        entries, key=lambda e: (language_score(e.language, policy), -e.channels)
    )


def sort_subtitle_entries(
    entries: Sequence[SubtitlePlanEntry],
    policy: LanguagePolicy = DEFAULT_POLICY.languages,
) -> list[SubtitlePlanEntry]:
    """Sort by language score, forced subtitles before full ones."""
    return sorted(
        entries,
        key=lambda e: (language_score(e.language, policy), not e.is_forced),
    )
