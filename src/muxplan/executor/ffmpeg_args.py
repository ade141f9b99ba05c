"""FFmpeg argument rendering for mux plans.

This module flattens a MuxPlan into the discrete argument list ffmpeg
expects. Nothing here runs ffmpeg; callers pass the list to subprocess or
print it with format_command().
"""

from __future__ import annotations

import shlex
from pathlib import Path

from muxplan.planner.models import ArgPair, MuxPlan

FFMPEG = "ffmpeg"
DEFAULT_CONTAINER_FORMAT = "matroska"


def _flatten(pairs: list[ArgPair] | tuple[ArgPair, ...]) -> list[str]:
    args: list[str] = []
    for flag, value in pairs:
        args.extend([flag, value])
    return args


def build_output_args(plan: MuxPlan) -> list[str]:
    """Build the output arguments for a mux plan.

    Order: global args, filter graph, video, audio, subtitles,
    attachments, container format. Audio and subtitle options are indexed
    by output position (-c:a:0, -c:a:1, ...).

    Args:
        plan: Compiled mux plan.

    Returns:
        List of ffmpeg arguments, without input or output file.
    """
    args = _flatten(plan.global_args)

    if plan.filter_graph:
        graph = ";".join(segment.expression for segment in plan.filter_graph)
        args.extend(["-filter_complex", graph])

    args.extend(["-map", plan.video.map_spec])
    args.extend(_flatten(plan.video.args()))

    for n, track in enumerate(plan.audio_tracks):
        entry = track.entry
        args.extend(["-map", entry.map_label])
        args.extend([f"-c:a:{n}", track.codec])
        if track.bitrate:
            args.extend([f"-b:a:{n}", track.bitrate])
        if track.output_channels:
            args.extend([f"-ac:a:{n}", str(track.output_channels)])
        args.extend([f"-disposition:a:{n}", track.disposition])
        args.extend([f"-metadata:s:a:{n}", f"language={entry.language}"])
        args.extend([f"-metadata:s:a:{n}", f"title={entry.title}"])

    for n, sub in enumerate(plan.subtitle_tracks):
        entry = sub.entry
        args.extend(["-map", entry.map_label])
        args.extend([f"-c:s:{n}", sub.codec])
        args.extend([f"-disposition:s:{n}", sub.disposition])
        args.extend([f"-metadata:s:s:{n}", f"language={entry.language}"])
        args.extend([f"-metadata:s:s:{n}", f"title={entry.title}"])

    for index in plan.attachments.indices:
        args.extend(["-map", f"0:{index}"])
    if plan.attachments.copy_metadata:
        args.extend(["-c:t", "copy", "-map_metadata:s:t", "0:s:t"])

    args.extend(["-f", plan.video.container_format])
    return args


def build_ffmpeg_command(
    plan: MuxPlan,
    input_path: Path | str,
    output_path: Path | str,
) -> list[str]:
    """Build a complete ffmpeg command line for a mux plan.

    Args:
        plan: Compiled mux plan.
        input_path: Source file.
        output_path: Destination file.

    Returns:
        List of command arguments starting with "ffmpeg".
    """
    cmd = [FFMPEG, "-y", "-i", str(input_path)]
    cmd.extend(build_output_args(plan))
    cmd.append(str(output_path))
    return cmd


def build_copy_fallback_args(
    container_format: str = DEFAULT_CONTAINER_FORMAT,
) -> list[str]:
    """Output arguments that stream-copy everything unchanged.

    Used when a probe report cannot be compiled, so one malformed file
    still passes through a batch instead of stopping it.
    """
    return ["-map", "0", "-c", "copy", "-f", container_format]


def build_copy_fallback_command(
    input_path: Path | str,
    output_path: Path | str,
    container_format: str = DEFAULT_CONTAINER_FORMAT,
) -> list[str]:
    """Complete ffmpeg command for the stream-copy fallback."""
    return [
        FFMPEG,
        "-y",
        "-i",
        str(input_path),
        *build_copy_fallback_args(container_format),
        str(output_path),
    ]


def format_command(cmd: list[str]) -> str:
    """Quote a command for display or copy-paste into a POSIX shell."""
    return shlex.join(cmd)
