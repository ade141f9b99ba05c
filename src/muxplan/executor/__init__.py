"""Rendering of mux plans into ffmpeg argument lists."""

from muxplan.executor.ffmpeg_args import (
    build_copy_fallback_args,
    build_copy_fallback_command,
    build_ffmpeg_command,
    build_output_args,
    format_command,
)

__all__ = [
    "build_copy_fallback_args",
    "build_copy_fallback_command",
    "build_ffmpeg_command",
    "build_output_args",
    "format_command",
]
