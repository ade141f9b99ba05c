"""Planner module for muxplan.

Turns classified streams into an immutable MuxPlan:

- compile_mux_plan: run every stage for one probe report
- defaults / subtitles / downmix / sorting / video: individual stages
- MuxPlanBuilder: final assembly
"""

from muxplan.planner.assembler import MuxPlanBuilder
from muxplan.planner.compiler import compile_mux_plan
from muxplan.planner.formatters import format_human, format_json
from muxplan.planner.models import (
    AttachmentPlan,
    AudioPlanEntry,
    AudioTrackPlan,
    ColorMetadata,
    DropReason,
    FilterGraphSegment,
    MuxPlan,
    SubtitlePlanEntry,
    SubtitleTrackPlan,
    VideoPlan,
)

__all__ = [
    "AttachmentPlan",
    "AudioPlanEntry",
    "AudioTrackPlan",
    "ColorMetadata",
    "DropReason",
    "FilterGraphSegment",
    "MuxPlan",
    "MuxPlanBuilder",
    "SubtitlePlanEntry",
    "SubtitleTrackPlan",
    "VideoPlan",
    "compile_mux_plan",
    "format_human",
    "format_json",
]
