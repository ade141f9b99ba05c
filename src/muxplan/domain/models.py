"""Stream descriptors produced by the classifier.

One frozen dataclass per stream kind, each carrying only the fields that
kind needs. Optional ffprobe tags are defaulted once during classification,
so downstream stages never re-check for missing language or title.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from muxplan.domain.enums import StreamKind

PGS_CODEC = "hdmv_pgs_subtitle"


class SubtitleRegistryKey(NamedTuple):
    """Identity used to detect image/text subtitle duplicates."""

    language: str
    is_forced: bool


@dataclass(frozen=True)
class StreamDescriptor:
    """Fields shared by every stream kind."""

    index: int
    kind: StreamKind
    codec_name: str = ""
    language: str = "und"
    title: str = ""
    is_forced: bool = False
    is_default: bool = False


@dataclass(frozen=True)
class VideoStream(StreamDescriptor):
    """A video stream, including embedded cover art."""

    kind: StreamKind = StreamKind.VIDEO
    width: int | None = None
    height: int | None = None
    color_primaries: str | None = None
    color_transfer: str | None = None
    color_space: str | None = None
    is_attached_pic: bool = False


@dataclass(frozen=True)
class AudioStream(StreamDescriptor):
    """An audio stream."""

    kind: StreamKind = StreamKind.AUDIO
    channels: int = 2


@dataclass(frozen=True)
class SubtitleStream(StreamDescriptor):
    """A subtitle stream."""

    kind: StreamKind = StreamKind.SUBTITLE

    @property
    def registry_key(self) -> SubtitleRegistryKey:
        return SubtitleRegistryKey(self.language, self.is_forced)

    @property
    def is_image_based(self) -> bool:
        return self.codec_name == PGS_CODEC


@dataclass(frozen=True)
class AttachmentStream(StreamDescriptor):
    """An attachment (fonts, images) carried by the container."""

    kind: StreamKind = StreamKind.ATTACHMENT
    has_mime_tag: bool = False


@dataclass(frozen=True)
class OtherStream(StreamDescriptor):
    """Data or unknown streams; classified but never mapped."""

    kind: StreamKind = StreamKind.OTHER


@dataclass(frozen=True)
class ProbeSnapshot:
    """Immutable result of classifying one probe report."""

    streams: tuple[StreamDescriptor, ...]
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def video_streams(self) -> tuple[VideoStream, ...]:
        return tuple(s for s in self.streams if isinstance(s, VideoStream))

    @property
    def audio_streams(self) -> tuple[AudioStream, ...]:
        return tuple(s for s in self.streams if isinstance(s, AudioStream))

    @property
    def subtitle_streams(self) -> tuple[SubtitleStream, ...]:
        return tuple(s for s in self.streams if isinstance(s, SubtitleStream))

    @property
    def attachment_streams(self) -> tuple[AttachmentStream, ...]:
        return tuple(s for s in self.streams if isinstance(s, AttachmentStream))

    def by_index(self, index: int) -> StreamDescriptor | None:
        """Return the stream with the given source index, or None."""
        return next((s for s in self.streams if s.index == index), None)
