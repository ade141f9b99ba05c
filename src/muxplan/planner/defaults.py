"""Default audio and subtitle track selection.

Audio prefers the German track with the most channels. Subtitles are chosen
from the set that survived filtering, with forced subtitles first and a
full-subtitle fallback that only applies to Japanese audio.
"""

import logging
from collections.abc import Sequence

from muxplan.domain.models import AudioStream, SubtitleStream
from muxplan.policy.types import DEFAULT_POLICY, MuxPolicy

logger = logging.getLogger(__name__)

NO_DEFAULT = -1


def select_default_audio(
    streams: Sequence[AudioStream],
    policy: MuxPolicy = DEFAULT_POLICY,
) -> int:
    """Select the default audio stream.

    Priority:
    1. German-family track with the highest channel count (first wins ties)
    2. First track already flagged default in the source
    3. First audio track in source order

    Args:
        streams: Audio streams in source order.
        policy: Mux policy providing the German language family.

    Returns:
        Source index of the selected stream, or -1 when there is no audio.
    """
    german = frozenset(policy.languages.german)
    candidates = [s for s in streams if s.language in german]
    if candidates:
        # max() keeps the first of equal elements
        best = max(candidates, key=lambda s: s.channels)
        logger.debug(
            "Default audio: German stream %d (%d channels)", best.index, best.channels
        )
        return best.index

    flagged = next((s for s in streams if s.is_default), None)
    if flagged is not None:
        logger.debug("Default audio: source-flagged stream %d", flagged.index)
        return flagged.index

    if streams:
        logger.debug("Default audio: first audio stream %d", streams[0].index)
        return streams[0].index

    return NO_DEFAULT


def select_default_subtitle(
    subtitles: Sequence[SubtitleStream],
    default_audio_language: str | None,
    policy: MuxPolicy = DEFAULT_POLICY,
) -> int:
    """Select the default subtitle stream among the surviving subtitles.

    First match wins:
    1. German forced
    2. English forced
    3. Only for Japanese default audio: first English full subtitle, else
       first German full subtitle
    4. No default subtitle

    Args:
        subtitles: Subtitles that survived filtering, in source order.
        default_audio_language: Language of the default audio stream, or
            None when there is no audio.
        policy: Mux policy providing the language families.

    Returns:
        Source index of the selected stream, or -1.
    """
    german = frozenset(policy.languages.german)
    english = frozenset(policy.languages.english)

    def first(languages: frozenset[str], forced: bool) -> SubtitleStream | None:
        return next(
            (
                s
                for s in subtitles
                if s.language in languages and s.is_forced == forced
            ),
            None,
        )

    match = first(german, True) or first(english, True)
    if match is None and default_audio_language == policy.languages.japanese:
        match = first(english, False) or first(german, False)

    if match is None:
        return NO_DEFAULT

    logger.debug(
        "Default subtitle: stream %d (%s, forced=%s)",
        match.index,
        match.language,
        match.is_forced,
    )
    return match.index
