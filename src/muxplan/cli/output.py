"""Error and warning output shared by CLI commands.

Everything here writes to stderr, so stdout only ever carries the plan or
policy a command was asked to print.
"""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

from muxplan.cli.exit_codes import ExitCode


def _code_name(code: int) -> str:
    try:
        return ExitCode(code).name
    except ValueError:
        return "UNKNOWN_ERROR"


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Report an error on stderr and exit with code.

    With json_output the error is a single JSON object:
    {"status": "failed", "error": {"code": "<EXIT_CODE_NAME>", "message": ...}}
    """
    if json_output:
        payload = {
            "status": "failed",
            "error": {"code": _code_name(code), "message": message},
        }
        click.echo(json.dumps(payload), err=True)
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def warning_output(message: str) -> None:
    click.echo(f"Warning: {message}", err=True)
