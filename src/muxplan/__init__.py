"""muxplan - deterministic mux plan compiler for probed media containers.

Turns ffprobe stream metadata into an ordered, immutable MuxPlan: which
tracks to keep, how to encode them, which ones are default/forced, how to
name them, and which stereo downmixes to synthesize.

Usage:
    from muxplan import compile_mux_plan

    plan = compile_mux_plan(probe_data, source_path="/media/Movie.mkv")
"""

from muxplan.exceptions import InvalidInputError, MuxPlanError
from muxplan.planner.compiler import compile_mux_plan
from muxplan.planner.models import MuxPlan

__version__ = "0.1.0"

__all__ = [
    "InvalidInputError",
    "MuxPlan",
    "MuxPlanError",
    "__version__",
    "compile_mux_plan",
]
