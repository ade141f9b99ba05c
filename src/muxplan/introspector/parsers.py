"""Pure parsing functions that classify ffprobe JSON into stream descriptors.

These functions transform ffprobe data into muxplan domain objects. They
perform no I/O and hold no state, so one probe report always classifies to
the same ProbeSnapshot.
"""

import logging
from collections.abc import Mapping
from typing import Any

from muxplan.domain import (
    AttachmentStream,
    AudioStream,
    OtherStream,
    ProbeSnapshot,
    StreamDescriptor,
    StreamKind,
    SubtitleStream,
    VideoStream,
)
from muxplan.exceptions import InvalidInputError
from muxplan.introspector.mappings import MIME_TAG_KEYS, map_stream_kind
from muxplan.language import normalize_language

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_CHANNELS = 2
FORCED_TITLE_KEYWORD = "forced"


def sanitize_string(value: Any) -> str | None:
    """Sanitize a tag value by replacing invalid UTF-8 characters.

    Args:
        value: Raw tag value.

    Returns:
        Sanitized string, or None if input was None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value.encode("utf-8", errors="replace").decode("utf-8")


def validate_non_negative_int(
    value: Any,
    field_name: str,
    file_path: str | None = None,
) -> int | None:
    """Validate that a value is a non-negative integer or None.

    Args:
        value: Value to validate.
        field_name: Field name for warning messages.
        file_path: File path context for warnings.

    Returns:
        Validated value or None if invalid.
    """
    if value is None:
        return None
    context = f" in {file_path}" if file_path else ""
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning(
            "Expected int for %s, got %s%s", field_name, type(value).__name__, context
        )
        return None
    if value < 0:
        logger.warning("Invalid negative %s: %d%s", field_name, value, context)
        return None
    return value


def get_tag(tags: Mapping[str, Any], key: str) -> str | None:
    """Look up a tag, falling back to a case-insensitive match."""
    if key in tags:
        return sanitize_string(tags[key])
    folded = key.casefold()
    for tag_key, value in tags.items():
        if tag_key.casefold() == folded:
            return sanitize_string(value)
    return None


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def is_forced_stream(disposition: Mapping[str, Any], title: str) -> bool:
    """Return True if a stream is forced.

    The disposition flag is authoritative. A title containing "forced" is
    only a fallback signal: it can mark a stream forced, never unmark one.
    """
    if disposition.get("forced", 0) == 1:
        return True
    if FORCED_TITLE_KEYWORD in title.casefold():
        logger.debug("Treating stream titled %r as forced (title fallback)", title)
        return True
    return False


def has_mime_tag(tags: Mapping[str, Any]) -> bool:
    """Return True if an attachment carries a usable mime-type tag."""
    return any(
        key.casefold() in MIME_TAG_KEYS and bool(value) for key, value in tags.items()
    )


def parse_stream(
    stream: Mapping[str, Any],
    file_path: str | None = None,
) -> StreamDescriptor:
    """Classify a single ffprobe stream dict into a typed descriptor.

    Args:
        stream: Stream dictionary from ffprobe JSON.
        file_path: Optional file path for context in messages.

    Returns:
        Descriptor of the matching kind.

    Raises:
        InvalidInputError: If the stream has no integer index.
    """
    index = stream.get("index")
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidInputError(
            f"Stream has missing or non-integer index: {index!r}", file_path
        )

    kind = map_stream_kind(stream.get("codec_type"))
    disposition = _as_mapping(stream.get("disposition"))
    tags = _as_mapping(stream.get("tags"))

    title = get_tag(tags, "title") or ""
    common: dict[str, Any] = {
        "index": index,
        "codec_name": sanitize_string(stream.get("codec_name")) or "",
        "language": normalize_language(get_tag(tags, "language"), context=file_path),
        "title": title,
        "is_forced": is_forced_stream(disposition, title),
        "is_default": disposition.get("default", 0) == 1,
    }

    if kind == StreamKind.VIDEO:
        return VideoStream(
            **common,
            width=validate_non_negative_int(stream.get("width"), "width", file_path),
            height=validate_non_negative_int(stream.get("height"), "height", file_path),
            color_primaries=sanitize_string(stream.get("color_primaries")),
            color_transfer=sanitize_string(stream.get("color_transfer")),
            color_space=sanitize_string(stream.get("color_space")),
            is_attached_pic=disposition.get("attached_pic", 0) == 1,
        )

    if kind == StreamKind.AUDIO:
        channels = validate_non_negative_int(
            stream.get("channels"), "channels", file_path
        )
        return AudioStream(**common, channels=channels or DEFAULT_AUDIO_CHANNELS)

    if kind == StreamKind.SUBTITLE:
        return SubtitleStream(**common)

    if kind == StreamKind.ATTACHMENT:
        return AttachmentStream(**common, has_mime_tag=has_mime_tag(tags))

    return OtherStream(**common)


def classify_streams(
    probe: Mapping[str, Any] | None,
    file_path: str | None = None,
) -> ProbeSnapshot:
    """Classify an ffprobe report into an immutable ProbeSnapshot.

    Args:
        probe: Parsed ffprobe JSON (must contain a "streams" list).
        file_path: Optional file path for context in messages.

    Returns:
        ProbeSnapshot with descriptors in source container order.

    Raises:
        InvalidInputError: If the probe data or its stream list is absent
            or malformed.
    """
    if probe is None:
        raise InvalidInputError("Probe data is missing", file_path)
    if not isinstance(probe, Mapping):
        raise InvalidInputError(
            f"Probe data must be a mapping, got {type(probe).__name__}", file_path
        )

    streams = probe.get("streams")
    if streams is None:
        raise InvalidInputError("Probe data has no stream list", file_path)
    if not isinstance(streams, list):
        raise InvalidInputError(
            f"Probe stream list must be a list, got {type(streams).__name__}",
            file_path,
        )

    descriptors: list[StreamDescriptor] = []
    warnings: list[str] = []
    seen_indices: set[int] = set()

    for position, stream in enumerate(streams):
        if not isinstance(stream, Mapping):
            raise InvalidInputError(
                f"Stream entry {position} is not a mapping", file_path
            )
        descriptor = parse_stream(stream, file_path)

        if descriptor.index in seen_indices:
            message = f"Duplicate stream index {descriptor.index}, skipping"
            logger.warning(message)
            warnings.append(message)
            continue
        seen_indices.add(descriptor.index)
        descriptors.append(descriptor)

    logger.debug(
        "Classified %d streams (%d audio, %d subtitle)",
        len(descriptors),
        sum(1 for d in descriptors if d.kind == StreamKind.AUDIO),
        sum(1 for d in descriptors if d.kind == StreamKind.SUBTITLE),
    )
    return ProbeSnapshot(streams=tuple(descriptors), warnings=tuple(warnings))
