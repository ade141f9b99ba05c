"""Subtitle filtering, image/text deduplication and renaming."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from muxplan.domain.models import SubtitleRegistryKey, SubtitleStream
from muxplan.language import language_label
from muxplan.planner.models import DropReason, SubtitlePlanEntry
from muxplan.policy.types import SubtitlePolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubtitleFilterResult:
    """Surviving subtitles in source order plus what was dropped and why."""

    kept: tuple[SubtitleStream, ...]
    dropped: tuple[tuple[int, DropReason], ...]

    @property
    def kept_indices(self) -> tuple[int, ...]:
        return tuple(s.index for s in self.kept)


def build_image_registry(
    subtitles: Sequence[SubtitleStream],
    policy: SubtitlePolicy,
) -> frozenset[SubtitleRegistryKey]:
    """Collect (language, forced) keys of every image-based subtitle.

    The registry is built from all subtitle streams, including those the
    language filter later drops.
    """
    image_codecs = frozenset(policy.image_codecs)
    return frozenset(s.registry_key for s in subtitles if s.codec_name in image_codecs)


def filter_subtitles(
    subtitles: Sequence[SubtitleStream],
    policy: SubtitlePolicy,
) -> SubtitleFilterResult:
    """Drop disallowed, commentary and duplicate subtitles.

    A text subtitle whose (language, forced) key matches an image subtitle
    is a duplicate; the image subtitle is kept. Titles are not part of the
    key.

    Args:
        subtitles: Subtitle streams in source order.
        policy: Subtitle policy.

    Returns:
        SubtitleFilterResult with surviving streams in source order.
    """
    registry = build_image_registry(subtitles, policy)
    allowed = frozenset(policy.allowed_languages)
    text_codecs = frozenset(policy.text_codecs)

    kept: list[SubtitleStream] = []
    dropped: list[tuple[int, DropReason]] = []

    for sub in subtitles:
        title = sub.title.casefold()
        if sub.language not in allowed:
            logger.debug(
                "Dropping subtitle %d: language %r not allowed",
                sub.index,
                sub.language,
            )
            dropped.append((sub.index, DropReason.LANGUAGE))
            continue

        if any(keyword in title for keyword in policy.excluded_title_keywords):
            logger.debug("Dropping subtitle %d: commentary track", sub.index)
            dropped.append((sub.index, DropReason.COMMENTARY))
            continue

        if sub.codec_name in text_codecs and sub.registry_key in registry:
            logger.info(
                "Removing duplicate text subtitle %d: %s (forced: %s)",
                sub.index,
                sub.language,
                sub.is_forced,
            )
            dropped.append((sub.index, DropReason.DUPLICATE))
            continue

        kept.append(sub)

    return SubtitleFilterResult(kept=tuple(kept), dropped=tuple(dropped))


def subtitle_title(sub: SubtitleStream, policy: SubtitlePolicy) -> str:
    """Standardized title: "GER Forced", "ENG Full" or "ENG SDH".

    An SDH marker in the source title wins over the forced flag.
    """
    if policy.sdh_keyword and policy.sdh_keyword in sub.title.casefold():
        template = policy.sdh_title
    elif sub.is_forced:
        template = policy.forced_title
    else:
        template = policy.full_title
    return template.format(lang=language_label(sub.language))


def plan_subtitles(
    subtitles: Sequence[SubtitleStream],
    policy: SubtitlePolicy,
) -> list[SubtitlePlanEntry]:
    """Build plan entries for the surviving subtitles, in the given order."""
    return [
        SubtitlePlanEntry(
            source_index=sub.index,
            language=sub.language,
            is_forced=sub.is_forced,
            title=subtitle_title(sub, policy),
        )
        for sub in subtitles
    ]
