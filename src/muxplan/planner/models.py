"""Data models for mux plans.

This module defines the frozen dataclasses produced by the planner stages:
- Audio and subtitle plan entries, before codec resolution
- Filter graph segments for generated stereo tracks
- Video encode parameters
- Resolved output tracks and the final MuxPlan

Arguments are kept as discrete strings in (flag, value) pairs; turning them
into a command line is left to the caller (see muxplan.executor).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from muxplan.domain.enums import HDRType

ArgPair = tuple[str, str]


class DropReason(str, Enum):
    """Why a subtitle stream was left out of the plan."""

    LANGUAGE = "language"  # language outside the allow-list
    COMMENTARY = "commentary"  # title marks a commentary track
    DUPLICATE = "duplicate"  # text copy of an image subtitle


@dataclass(frozen=True)
class AudioPlanEntry:
    """One output audio track, original or generated."""

    source_index: int
    """Source stream index (for generated tracks: the downmixed stream)."""

    is_generated: bool
    """True if the track is a filter graph output, not a source stream."""

    language: str
    channels: int

    map_label: str
    """Either "0:<index>" or the filter graph output label."""

    title: str

    is_default_candidate: bool = False
    """True for the original track selected as default audio."""

    codec_name: str = ""
    """Source codec; empty for generated tracks."""


@dataclass(frozen=True)
class SubtitlePlanEntry:
    """One output subtitle track."""

    source_index: int
    language: str
    is_forced: bool
    title: str

    @property
    def map_label(self) -> str:
        return f"0:{self.source_index}"


@dataclass(frozen=True)
class FilterGraphSegment:
    """A labelled filter chain, e.g. [0:1]pan=...,alimiter=...[aud_norm_1].

    Purely descriptive; nothing in muxplan runs it.
    """

    input_label: str
    filters: tuple[str, ...]
    output_label: str

    @property
    def expression(self) -> str:
        return f"{self.input_label}{','.join(self.filters)}{self.output_label}"


@dataclass(frozen=True)
class ColorMetadata:
    """Color characteristics passed through explicitly for HDR sources."""

    primaries: str
    transfer: str
    space: str
    chroma_location: str | None = None

    def args(self) -> list[ArgPair]:
        pairs: list[ArgPair] = [
            ("-color_primaries", self.primaries),
            ("-color_trc", self.transfer),
            ("-colorspace", self.space),
        ]
        if self.chroma_location:
            pairs.append(("-chroma_sample_location", self.chroma_location))
        return pairs


@dataclass(frozen=True)
class VideoPlan:
    """Video mapping and encode parameters.

    With codec "copy" the crf, filters and encoder params are unset.
    """

    source_index: int | None
    """Primary video stream index, or None when the source has no video."""

    map_spec: str
    """"0:<index>", or the "0:v" wildcard when no video stream exists."""

    codec: str
    crf: int | None = None
    preset: str | None = None
    pixel_format: str | None = None
    filters: tuple[str, ...] = ()
    encoder_params: str | None = None
    color: ColorMetadata | None = None
    is_hdr: bool = False
    hdr_type: HDRType = HDRType.NONE
    is_animation: bool = False
    tier: str | None = None
    container_format: str = "matroska"
    width: int | None = None
    height: int | None = None

    @property
    def is_copy(self) -> bool:
        return self.codec == "copy"

    def args(self) -> list[ArgPair]:
        """Video output arguments, in the order ffmpeg receives them."""
        if self.is_copy:
            return [("-c:v", "copy")]

        pairs: list[ArgPair] = []
        if self.color is not None:
            pairs.extend(self.color.args())
        if self.filters:
            pairs.append(("-vf", ",".join(self.filters)))
        pairs.append(("-c:v", self.codec))
        if self.preset is not None:
            pairs.append(("-preset", self.preset))
        if self.pixel_format is not None:
            pairs.append(("-pix_fmt", self.pixel_format))
        if self.crf is not None:
            pairs.append(("-crf", str(self.crf)))
        if self.encoder_params:
            flag = f"-{_encoder_params_flag(self.codec)}"
            pairs.append((flag, self.encoder_params))
        return pairs


def _encoder_params_flag(codec: str) -> str:
    """Name of the encoder's private params option (libsvtav1 -> svtav1-params)."""
    return f"{codec.removeprefix('lib')}-params"


@dataclass(frozen=True)
class AudioTrackPlan:
    """An audio output track with resolved codec and disposition."""

    entry: AudioPlanEntry
    codec: str
    bitrate: str | None = None
    output_channels: int | None = None
    is_default: bool = False

    @property
    def disposition(self) -> str:
        return "default" if self.is_default else "0"


@dataclass(frozen=True)
class SubtitleTrackPlan:
    """A subtitle output track with resolved disposition."""

    entry: SubtitlePlanEntry
    codec: str = "copy"
    is_default: bool = False

    @property
    def disposition(self) -> str:
        flags = []
        if self.is_default:
            flags.append("default")
        if self.entry.is_forced:
            flags.append("forced")
        return "+".join(flags) if flags else "0"


@dataclass(frozen=True)
class AttachmentPlan:
    """Attachment streams to map.

    Attachments without a mime tag are skipped; copy_metadata is only set
    when at least one attachment is mapped.
    """

    indices: tuple[int, ...] = ()
    skipped: tuple[int, ...] = ()

    @property
    def copy_metadata(self) -> bool:
        return bool(self.indices)


@dataclass(frozen=True)
class MuxPlan:
    """The complete, immutable result of compiling one probe report."""

    global_args: tuple[ArgPair, ...]
    video: VideoPlan
    audio_tracks: tuple[AudioTrackPlan, ...] = ()
    subtitle_tracks: tuple[SubtitleTrackPlan, ...] = ()
    attachments: AttachmentPlan = field(default_factory=AttachmentPlan)
    filter_graph: tuple[FilterGraphSegment, ...] = ()
    default_audio_index: int = -1
    """Source index of the default audio stream, -1 when there is none."""

    default_subtitle_index: int = -1
    """Source index of the default subtitle stream, -1 when there is none."""

    dropped_subtitles: tuple[tuple[int, DropReason], ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def has_filter_graph(self) -> bool:
        return bool(self.filter_graph)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        video = self.video
        return {
            "global_args": [list(pair) for pair in self.global_args],
            "video": {
                "source_index": video.source_index,
                "map": video.map_spec,
                "codec": video.codec,
                "crf": video.crf,
                "preset": video.preset,
                "pixel_format": video.pixel_format,
                "filters": list(video.filters),
                "encoder_params": video.encoder_params,
                "color": (
                    {
                        "primaries": video.color.primaries,
                        "transfer": video.color.transfer,
                        "space": video.color.space,
                        "chroma_location": video.color.chroma_location,
                    }
                    if video.color
                    else None
                ),
                "is_hdr": video.is_hdr,
                "hdr_type": video.hdr_type.value,
                "is_animation": video.is_animation,
                "tier": video.tier,
                "container_format": video.container_format,
            },
            "audio_tracks": [
                {
                    "source_index": t.entry.source_index,
                    "is_generated": t.entry.is_generated,
                    "map": t.entry.map_label,
                    "language": t.entry.language,
                    "channels": t.entry.channels,
                    "title": t.entry.title,
                    "codec": t.codec,
                    "bitrate": t.bitrate,
                    "disposition": t.disposition,
                }
                for t in self.audio_tracks
            ],
            "subtitle_tracks": [
                {
                    "source_index": t.entry.source_index,
                    "map": t.entry.map_label,
                    "language": t.entry.language,
                    "is_forced": t.entry.is_forced,
                    "title": t.entry.title,
                    "codec": t.codec,
                    "disposition": t.disposition,
                }
                for t in self.subtitle_tracks
            ],
            "attachments": {
                "indices": list(self.attachments.indices),
                "skipped": list(self.attachments.skipped),
            },
            "filter_graph": [segment.expression for segment in self.filter_graph],
            "default_audio_index": self.default_audio_index,
            "default_subtitle_index": self.default_subtitle_index,
            "dropped_subtitles": [
                {"index": index, "reason": reason.value}
                for index, reason in self.dropped_subtitles
            ],
            "warnings": list(self.warnings),
        }
