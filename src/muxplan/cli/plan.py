"""CLI plan command: compile a probe report into an ffmpeg mux plan."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from muxplan.cli.exit_codes import ExitCode
from muxplan.cli.output import error_exit, warning_output
from muxplan.config import MuxplanConfig, get_config
from muxplan.exceptions import InvalidInputError
from muxplan.executor import (
    build_copy_fallback_args,
    build_copy_fallback_command,
    build_ffmpeg_command,
    build_output_args,
    format_command,
)
from muxplan.introspector import load_probe_file, load_probe_json
from muxplan.planner import compile_mux_plan, format_human, format_json
from muxplan.policy import (
    DEFAULT_POLICY,
    MuxPolicy,
    PolicyValidationError,
    load_policy,
)

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def _get_config(ctx: click.Context) -> MuxplanConfig:
    if ctx.obj and "config" in ctx.obj:
        return ctx.obj["config"]
    return get_config()


def _resolve_policy(policy_path: Path | None, json_output: bool) -> MuxPolicy:
    """Load the policy file, or return the built-in policy when none is set."""
    if policy_path is None:
        return DEFAULT_POLICY
    try:
        return load_policy(policy_path)
    except FileNotFoundError:
        error_exit(
            f"Policy file not found: {policy_path}",
            ExitCode.TARGET_NOT_FOUND,
            json_output,
        )
    except PolicyValidationError as e:
        error_exit(
            f"Invalid policy {policy_path}: {e}",
            ExitCode.POLICY_VALIDATION_ERROR,
            json_output,
        )


def _read_probe(probe_json: str) -> dict[str, Any]:
    if probe_json == STDIN_MARKER:
        content = click.get_text_stream("stdin").read()
        return load_probe_json(content, source="<stdin>")
    return load_probe_file(Path(probe_json))


def _default_source(probe_json: str, probe: dict[str, Any] | None) -> str | None:
    """Source identifier: ffprobe's format.filename, else the report path."""
    if probe:
        fmt = probe.get("format")
        if isinstance(fmt, dict) and fmt.get("filename"):
            return str(fmt["filename"])
    if probe_json == STDIN_MARKER:
        return None
    return probe_json


def _emit_fallback(
    error: InvalidInputError,
    output_format: str,
    input_path: str,
    output_path: str,
) -> None:
    warning_output(f"{error}; falling back to stream copy")
    if output_format == "json":
        click.echo(
            json.dumps(
                {
                    "fallback": True,
                    "error": str(error),
                    "args": build_copy_fallback_args(),
                },
                indent=2,
            )
        )
    elif output_format == "shell":
        click.echo(
            format_command(build_copy_fallback_command(input_path, output_path))
        )
    else:
        click.echo(format_command(build_copy_fallback_args()))


@click.command("plan")
@click.argument("probe_json", type=str)
@click.option(
    "--source",
    "source",
    default=None,
    help="Source media path (default: format.filename from the probe report).",
)
@click.option(
    "--title",
    default=None,
    help="Container title (default: source file name without extension).",
)
@click.option(
    "--policy",
    "policy_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Policy YAML file (default: built-in policy).",
)
@click.option(
    "--animation/--no-animation",
    "is_animation",
    default=None,
    help="Treat the video as animation (default: guess from the source path).",
)
@click.option(
    "--transcode-video/--copy-video",
    "transcode_video",
    default=None,
    help="Re-encode video or stream-copy it (default: from config).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json", "args", "shell"]),
    default="human",
    help="Output format (default: human)",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    default=None,
    help="Output file for --format shell (default: <source>.mkv).",
)
@click.option(
    "--fallback-copy",
    is_flag=True,
    default=False,
    help="On invalid probe data, print a stream-copy command instead of failing.",
)
@click.pass_context
def plan_command(
    ctx: click.Context,
    probe_json: str,
    source: str | None,
    title: str | None,
    policy_path: Path | None,
    is_animation: bool | None,
    transcode_video: bool | None,
    output_format: str,
    output_path: str | None,
    fallback_copy: bool,
) -> None:
    """Compile an ffprobe JSON report into a mux plan.

    PROBE_JSON is the output of `ffprobe -print_format json -show_streams
    -show_format`, or - to read it from stdin.

    Use --format args to print only the ffmpeg output arguments, or
    --format shell for a complete ffmpeg command line.
    """
    config = _get_config(ctx)
    json_output = output_format == "json"

    if transcode_video is None:
        transcode_video = config.defaults.transcode_video
    policy = _resolve_policy(policy_path or config.defaults.policy_path, json_output)

    probe: dict[str, Any] | None = None
    try:
        probe = _read_probe(probe_json)
        source = source or _default_source(probe_json, probe)
        plan = compile_mux_plan(
            probe,
            source,
            title=title,
            is_animation=is_animation,
            transcode_video=transcode_video,
            policy=policy,
        )
    except InvalidInputError as e:
        source = source or _default_source(probe_json, probe) or "input"
        if not fallback_copy:
            error_exit(str(e), ExitCode.INVALID_INPUT, json_output)
        logger.warning("Falling back to stream copy: %s", e)
        _emit_fallback(
            e, output_format, source, output_path or _default_output(source)
        )
        return

    for warning in plan.warnings:
        logger.warning("%s", warning)

    if output_format == "json":
        click.echo(format_json(plan))
    elif output_format == "args":
        click.echo(format_command(build_output_args(plan)))
    elif output_format == "shell":
        input_path = source or "input"
        cmd = build_ffmpeg_command(
            plan, input_path, output_path or _default_output(input_path)
        )
        click.echo(format_command(cmd))
    else:
        click.echo(format_human(plan, source))


def _default_output(input_path: str) -> str:
    """Output path next to the input, with a .mkv suffix."""
    path = Path(input_path)
    if path.suffix.lower() == ".mkv":
        return str(path.with_name(f"{path.stem}.muxed.mkv"))
    return str(path.with_suffix(".mkv"))
