"""Mux plan compilation.

compile_mux_plan() runs the planner stages in order:

1. classify streams
2. select the default audio track
3. filter and deduplicate subtitles, then select the default subtitle
4. plan stereo downmixes
5. sort audio and subtitle entries
6. select video parameters
7. assemble the MuxPlan

The function does no I/O and keeps no state between calls, so a host may
run it concurrently for many files.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import PurePath
from typing import Any

from muxplan.introspector.parsers import classify_streams
from muxplan.logging.context import file_context
from muxplan.planner.assembler import MuxPlanBuilder
from muxplan.planner.defaults import select_default_audio, select_default_subtitle
from muxplan.planner.downmix import plan_audio_entries, plan_downmix
from muxplan.planner.models import MuxPlan
from muxplan.planner.sorting import sort_audio_entries, sort_subtitle_entries
from muxplan.planner.subtitles import filter_subtitles, plan_subtitles
from muxplan.planner.video import detect_animation, select_video_parameters
from muxplan.policy.types import DEFAULT_POLICY, MuxPolicy

logger = logging.getLogger(__name__)


def title_from_path(source_path: str | None) -> str | None:
    """Container title derived from the file name without extension."""
    if not source_path:
        return None
    # Accept Windows separators as well
    name = source_path.replace("\\", "/").rsplit("/", 1)[-1]
    return PurePath(name).stem or None


def compile_mux_plan(
    probe: Mapping[str, Any] | None,
    source_path: str | None = None,
    *,
    title: str | None = None,
    is_animation: bool | None = None,
    transcode_video: bool = True,
    policy: MuxPolicy = DEFAULT_POLICY,
) -> MuxPlan:
    """Compile an ffprobe report into a MuxPlan.

    Args:
        probe: Parsed ffprobe JSON (must contain a "streams" list).
        source_path: Identifier of the source file; used for the default
            title, the animation heuristic and log context.
        title: Container title; defaults to the file name stem.
        is_animation: Content-type hint. None applies the path keyword
            heuristic from the video policy.
        transcode_video: False copies the video stream.
        policy: Mux policy.

    Returns:
        The immutable MuxPlan.

    Raises:
        InvalidInputError: If the probe data is missing or malformed.
    """
    with file_context(source_path):
        snapshot = classify_streams(probe, file_path=source_path)
        audio_streams = snapshot.audio_streams
        languages = policy.languages

        default_audio = select_default_audio(audio_streams, policy)
        default_audio_stream = snapshot.by_index(default_audio)
        default_audio_language = (
            default_audio_stream.language if default_audio_stream else None
        )

        subtitle_result = filter_subtitles(snapshot.subtitle_streams, policy.subtitles)
        default_subtitle = select_default_subtitle(
            subtitle_result.kept, default_audio_language, policy
        )
        logger.info(
            "Default audio: %d | default subtitle: %d", default_audio, default_subtitle
        )

        downmix = plan_downmix(audio_streams, policy.downmix)
        if default_audio in downmix.replacement_sources:
            # Same language, so the subtitle choice above still holds
            replaced_default = default_audio
            default_audio = downmix.replacement_sources[replaced_default]
            logger.info(
                "Default audio %d is replaced, moving default to stream %d",
                replaced_default,
                default_audio,
            )
        audio_entries = sort_audio_entries(
            plan_audio_entries(audio_streams, downmix, default_audio, policy.audio),
            languages,
        )
        subtitle_entries = sort_subtitle_entries(
            plan_subtitles(subtitle_result.kept, policy.subtitles), languages
        )

        if is_animation is None:
            is_animation = detect_animation(
                source_path, policy.video.animation_keywords
            )
        video, video_warnings = select_video_parameters(
            snapshot.video_streams, is_animation, transcode_video, policy.video
        )

        builder = MuxPlanBuilder(policy)
        builder.set_title(title if title is not None else title_from_path(source_path))
        builder.set_defaults(default_audio, default_subtitle)
        builder.set_video(video)
        builder.add_filter_segments(downmix.segments)
        for entry in audio_entries:
            builder.add_audio(entry)
        for sub in subtitle_entries:
            builder.add_subtitle(sub)
        builder.add_attachments(snapshot.attachment_streams)
        builder.add_dropped_subtitles(subtitle_result.dropped)
        builder.add_warnings(snapshot.warnings)
        builder.add_warnings(downmix.warnings)
        builder.add_warnings(video_warnings)

        plan = builder.build()
        logger.debug(
            "Compiled plan: %d audio, %d subtitle, %d attachment tracks",
            len(plan.audio_tracks),
            len(plan.subtitle_tracks),
            len(plan.attachments.indices),
        )
        return plan
