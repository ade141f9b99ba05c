"""Domain enums for muxplan."""

from enum import Enum


class StreamKind(str, Enum):
    """Kind of a stream inside the probed container."""

    VIDEO = "video"
    AUDIO = "audio"
    SUBTITLE = "subtitle"
    ATTACHMENT = "attachment"
    OTHER = "other"  # data streams, unknown codec types


class HDRType(str, Enum):
    """HDR signal detected from the video transfer characteristic."""

    NONE = "none"
    HDR10 = "hdr10"  # PQ transfer function (smpte2084)
    HLG = "hlg"  # Hybrid Log-Gamma (arib-std-b67)
