"""Mux plan assembly.

MuxPlanBuilder accumulates the outputs of the planner stages and resolves
per-track codec, bitrate and disposition. build() freezes everything into
a MuxPlan; the builder itself never leaves the compile call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from muxplan.domain.models import AttachmentStream
from muxplan.planner.models import (
    ArgPair,
    AttachmentPlan,
    AudioPlanEntry,
    AudioTrackPlan,
    DropReason,
    FilterGraphSegment,
    MuxPlan,
    SubtitlePlanEntry,
    SubtitleTrackPlan,
    VideoPlan,
)
from muxplan.policy.types import MuxPolicy, OriginalAudioMode

logger = logging.getLogger(__name__)

COPY_CODEC = "copy"
OPUS_CODEC_NAME = "opus"


class MuxPlanBuilder:
    """Accumulates plan pieces for one file and builds the immutable MuxPlan."""

    def __init__(self, policy: MuxPolicy) -> None:
        self._policy = policy
        self._title: str | None = None
        self._video: VideoPlan | None = None
        self._audio: list[AudioTrackPlan] = []
        self._subtitles: list[SubtitleTrackPlan] = []
        self._segments: list[FilterGraphSegment] = []
        self._attachments = AttachmentPlan()
        self._default_audio_index = -1
        self._default_subtitle_index = -1
        self._dropped_subtitles: list[tuple[int, DropReason]] = []
        self._warnings: list[str] = []

    def set_title(self, title: str | None) -> None:
        self._title = title

    def set_video(self, video: VideoPlan) -> None:
        self._video = video

    def set_defaults(self, audio_index: int, subtitle_index: int) -> None:
        """Record the selected default audio and subtitle source indices."""
        self._default_audio_index = audio_index
        self._default_subtitle_index = subtitle_index

    def add_filter_segments(self, segments: Iterable[FilterGraphSegment]) -> None:
        self._segments.extend(segments)

    def add_warnings(self, warnings: Iterable[str]) -> None:
        self._warnings.extend(warnings)

    def add_dropped_subtitles(self, dropped: Iterable[tuple[int, DropReason]]) -> None:
        self._dropped_subtitles.extend(dropped)

    def add_audio(self, entry: AudioPlanEntry) -> None:
        """Append an audio track, resolving codec, bitrate and disposition.

        Generated tracks are always encoded with the downmix codec. Original
        tracks are copied, or re-encoded to Opus when the policy asks for it
        and the source is not Opus already.
        """
        downmix = self._policy.downmix
        audio = self._policy.audio

        if entry.is_generated:
            track = AudioTrackPlan(
                entry=entry, codec=downmix.codec, bitrate=downmix.bitrate
            )
        elif (
            audio.original_mode == OriginalAudioMode.OPUS
            and entry.codec_name != OPUS_CODEC_NAME
        ):
            track = AudioTrackPlan(
                entry=entry,
                codec=audio.opus_encoder,
                bitrate=audio.opus_bitrates.for_channels(entry.channels),
                output_channels=entry.channels,
                is_default=entry.source_index == self._default_audio_index,
            )
        else:
            track = AudioTrackPlan(
                entry=entry,
                codec=COPY_CODEC,
                is_default=entry.source_index == self._default_audio_index,
            )
        self._audio.append(track)

    def add_subtitle(self, entry: SubtitlePlanEntry) -> None:
        """Append a subtitle track; subtitles are always copied."""
        self._subtitles.append(
            SubtitleTrackPlan(
                entry=entry,
                codec=COPY_CODEC,
                is_default=entry.source_index == self._default_subtitle_index,
            )
        )

    def add_attachments(self, attachments: Iterable[AttachmentStream]) -> None:
        """Map attachments carrying a mime tag; skip and warn about the rest."""
        mapped: list[int] = []
        skipped: list[int] = []
        for attachment in attachments:
            if attachment.has_mime_tag:
                mapped.append(attachment.index)
            else:
                logger.warning(
                    "Skipping attachment stream %d: no mimetype tag", attachment.index
                )
                self._warnings.append(
                    f"Attachment stream {attachment.index} skipped: no mimetype tag"
                )
                skipped.append(attachment.index)
        self._attachments = AttachmentPlan(
            indices=self._attachments.indices + tuple(mapped),
            skipped=self._attachments.skipped + tuple(skipped),
        )

    def _global_args(self) -> tuple[ArgPair, ...]:
        args: list[ArgPair] = []
        if self._policy.strip_global_metadata:
            args.append(("-map_metadata:g", "-1"))
        if self._title:
            args.append(("-metadata", f"title={self._title}"))
        if self._policy.copy_chapters:
            args.append(("-map_chapters", "0"))
        return tuple(args)

    def build(self) -> MuxPlan:
        """Freeze the accumulated pieces into a MuxPlan.

        Raises:
            ValueError: If no video plan was set.
        """
        if self._video is None:
            raise ValueError("MuxPlanBuilder.build() called before set_video()")

        return MuxPlan(
            global_args=self._global_args(),
            video=self._video,
            audio_tracks=tuple(self._audio),
            subtitle_tracks=tuple(self._subtitles),
            attachments=self._attachments,
            filter_graph=tuple(self._segments),
            default_audio_index=self._default_audio_index,
            default_subtitle_index=self._default_subtitle_index,
            dropped_subtitles=tuple(self._dropped_subtitles),
            warnings=tuple(self._warnings),
        )
