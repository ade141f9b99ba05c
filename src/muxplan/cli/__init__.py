"""CLI module for muxplan."""

import logging
import sys
from pathlib import Path

import click

from muxplan.cli.exit_codes import ExitCode
from muxplan.config import build_logging_config, get_config
from muxplan.config.models import LOG_LEVELS
from muxplan.exceptions import ConfigError
from muxplan.logging import configure_logging

logger = logging.getLogger(__name__)


def _configure_logging(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the loaded config and CLI overrides."""
    config = ctx.obj["config"]
    logging_config = build_logging_config(
        config.logging,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    configure_logging(logging_config)


@click.group()
@click.version_option(package_name="muxplan")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.muxplan/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """muxplan - compile probed media streams into ffmpeg mux plans."""
    ctx.ensure_object(dict)

    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path)
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(ExitCode.CONFIG_ERROR)

    if not ctx.obj.get("skip_logging_setup"):
        _configure_logging(ctx, log_level, log_file, log_json)


def _register_commands() -> None:
    from muxplan.cli.plan import plan_command
    from muxplan.cli.policy import policy_group

    main.add_command(plan_command)
    main.add_command(policy_group)


_register_commands()
