"""Pure mapping functions for ffprobe to muxplan conversions."""

from muxplan.domain.enums import StreamKind

FFPROBE_TO_STREAM_KIND: dict[str, StreamKind] = {
    "video": StreamKind.VIDEO,
    "audio": StreamKind.AUDIO,
    "subtitle": StreamKind.SUBTITLE,
    "attachment": StreamKind.ATTACHMENT,
}

# Title layout labels, e.g. "GER 5.1"
CHANNEL_LAYOUT_LABELS: dict[int, str] = {
    1: "1.0",
    2: "2.0",
    6: "5.1",
    8: "7.1",
}

# Tag keys that carry an attachment's mime type
MIME_TAG_KEYS: frozenset[str] = frozenset({"mimetype", "content-type"})


def map_stream_kind(codec_type: str | None) -> StreamKind:
    """Map ffprobe codec_type to a StreamKind."""
    return FFPROBE_TO_STREAM_KIND.get(codec_type or "", StreamKind.OTHER)


def map_layout_label(channels: int) -> str:
    """Map a channel count to the label used in audio titles."""
    return CHANNEL_LAYOUT_LABELS.get(channels, f"{channels}ch")
