"""Introspector module for muxplan.

Classifies already-probed stream metadata into typed descriptors:

- classify_streams: ffprobe report -> ProbeSnapshot
- parse_stream: single stream dict -> StreamDescriptor
- load_probe_file / load_probe_json: read a captured ffprobe JSON report
"""

from muxplan.introspector.loader import load_probe_file, load_probe_json
from muxplan.introspector.mappings import map_layout_label, map_stream_kind
from muxplan.introspector.parsers import (
    classify_streams,
    is_forced_stream,
    parse_stream,
)

__all__ = [
    "classify_streams",
    "parse_stream",
    "is_forced_stream",
    "load_probe_file",
    "load_probe_json",
    "map_layout_label",
    "map_stream_kind",
]
