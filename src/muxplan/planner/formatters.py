"""Formatters for mux plans.

Human-readable and JSON renderings of a MuxPlan, used by the CLI.
"""

import json

from muxplan.planner.models import AudioTrackPlan, MuxPlan, SubtitleTrackPlan


def format_human(plan: MuxPlan, source: str | None = None) -> str:
    """Format a mux plan for terminal output.

    Args:
        plan: The plan to format.
        source: Optional source identifier shown in the header.

    Returns:
        Formatted multi-line string.
    """
    lines: list[str] = []
    if source:
        lines.append(f"File: {source}")

    video = plan.video
    lines.append("Video:")
    if video.is_copy:
        lines.append(f"  {video.map_spec} copy")
    else:
        parts = [video.map_spec, video.codec, f"crf={video.crf}", f"tier={video.tier}"]
        if video.is_hdr:
            parts.append(f"[{video.hdr_type.value.upper()}]")
        if video.is_animation:
            parts.append("[animation]")
        lines.append(f"  {' '.join(parts)}")
        if video.filters:
            lines.append(f"  filters: {','.join(video.filters)}")
        if video.encoder_params:
            lines.append(f"  params: {video.encoder_params}")

    lines.append("Audio:")
    if plan.audio_tracks:
        for n, track in enumerate(plan.audio_tracks):
            lines.append(f"  {n}: {format_audio_line(track)}")
    else:
        lines.append("  (none)")

    lines.append("Subtitles:")
    if plan.subtitle_tracks:
        for n, sub in enumerate(plan.subtitle_tracks):
            lines.append(f"  {n}: {format_subtitle_line(sub)}")
    else:
        lines.append("  (none)")

    if plan.attachments.indices:
        indices = ", ".join(str(i) for i in plan.attachments.indices)
        lines.append(f"Attachments: {indices}")

    if plan.filter_graph:
        lines.append("Filter graph:")
        for segment in plan.filter_graph:
            lines.append(f"  {segment.expression}")

    if plan.dropped_subtitles:
        lines.append("Dropped subtitles:")
        for index, reason in plan.dropped_subtitles:
            lines.append(f"  #{index} ({reason.value})")

    if plan.warnings:
        lines.append("")
        lines.append("Warnings:")
        for warning in plan.warnings:
            lines.append(f"  - {warning}")

    return "\n".join(lines)


def format_audio_line(track: AudioTrackPlan) -> str:
    entry = track.entry
    source = f"#{entry.source_index}"
    if entry.is_generated:
        source = f"generated from {source}"
    parts = [source, f'"{entry.title}"', entry.language, f"{entry.channels}ch"]
    codec = track.codec if track.bitrate is None else f"{track.codec}@{track.bitrate}"
    parts.append(codec)
    if track.is_default:
        parts.append("(default)")
    return " ".join(parts)


def format_subtitle_line(track: SubtitleTrackPlan) -> str:
    entry = track.entry
    parts = [f"#{entry.source_index}", f'"{entry.title}"', entry.language]
    if track.disposition != "0":
        parts.append(f"({track.disposition})")
    return " ".join(parts)


def format_json(plan: MuxPlan) -> str:
    """Format a mux plan as indented JSON."""
    return json.dumps(plan.to_dict(), indent=2)
