"""Domain models and enums for muxplan.

Usage:
    from muxplan.domain import AudioStream, ProbeSnapshot, StreamKind
"""

from .enums import HDRType, StreamKind
from .models import (
    PGS_CODEC,
    AttachmentStream,
    AudioStream,
    OtherStream,
    ProbeSnapshot,
    StreamDescriptor,
    SubtitleRegistryKey,
    SubtitleStream,
    VideoStream,
)

__all__ = [
    # Models
    "StreamDescriptor",
    "VideoStream",
    "AudioStream",
    "SubtitleStream",
    "AttachmentStream",
    "OtherStream",
    "ProbeSnapshot",
    "SubtitleRegistryKey",
    "PGS_CODEC",
    # Enums
    "StreamKind",
    "HDRType",
]
