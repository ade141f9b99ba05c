"""CLI commands for mux policies.

- policy show: print the effective policy (built-in or from a file)
- policy validate: check a policy YAML file
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click
import yaml

from muxplan.cli.exit_codes import ExitCode
from muxplan.cli.output import error_exit
from muxplan.policy import (
    DEFAULT_POLICY,
    PolicyValidationError,
    load_policy,
    policy_to_dict,
)

logger = logging.getLogger(__name__)


@click.group("policy")
def policy_group() -> None:
    """Inspect and validate mux policies.

    Examples:

        # Show the built-in policy as YAML
        muxplan policy show

        # Validate a policy file
        muxplan policy validate my-policy.yaml
    """


@policy_group.command("show")
@click.option(
    "--policy",
    "policy_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Policy YAML file (default: built-in policy).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format (default: yaml)",
)
def show_policy_cmd(policy_path: Path | None, output_format: str) -> None:
    """Display the effective policy with every default filled in.

    The YAML output is itself a valid policy file, so it is a convenient
    starting point for a custom policy.
    """
    json_output = output_format == "json"
    if policy_path is None:
        policy = DEFAULT_POLICY
    else:
        try:
            policy = load_policy(policy_path)
        except FileNotFoundError:
            error_exit(
                f"Policy file not found: {policy_path}",
                ExitCode.TARGET_NOT_FOUND,
                json_output,
            )
        except PolicyValidationError as e:
            error_exit(
                str(e),
                ExitCode.POLICY_VALIDATION_ERROR,
                json_output,
            )

    data = policy_to_dict(policy)
    if json_output:
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)


@policy_group.command("validate")
@click.argument("policy_file", type=click.Path(exists=False, path_type=Path))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
def validate_policy_cmd(policy_file: Path, output_format: str) -> None:
    """Validate a policy YAML file.

    Checks YAML syntax, the schema version, and every field value.

    Exit codes:
        0: Policy is valid
        10: Policy validation failed
    """
    result = _validate_policy(policy_file)

    if output_format == "json":
        click.echo(json.dumps(result, indent=2))
    else:
        _output_human(result)

    if not result["valid"]:
        raise SystemExit(ExitCode.POLICY_VALIDATION_ERROR)


def _error(
    result: dict[str, Any], message: str, code: str, field: str | None = None
) -> None:
    result["errors"].append({"field": field, "message": message, "code": code})
    result["message"] = message


def _validate_policy(policy_path: Path) -> dict[str, Any]:
    """Validate a policy file.

    Returns:
        Dict with keys: valid, file, message, errors
    """
    result: dict[str, Any] = {
        "valid": False,
        "file": str(policy_path),
        "errors": [],
    }

    if policy_path.is_dir():
        message = f"Path is a directory, not a file: {policy_path}"
        _error(result, message, "is_directory")
        return result

    try:
        load_policy(policy_path)
    except FileNotFoundError:
        _error(result, f"File not found: {policy_path}", "file_not_found")
    except PolicyValidationError as e:
        code = "validation_error"
        if e.message.startswith("Invalid YAML syntax"):
            code = "yaml_syntax_error"
        _error(result, e.message, code, e.field)
    except OSError as e:
        _error(result, f"Cannot read policy file: {e}", "read_error")
    else:
        result["valid"] = True
        result["message"] = "Policy is valid"

    return result


def _output_human(result: dict[str, Any]) -> None:
    if result["valid"]:
        status = click.style("Valid", fg="green")
        click.echo(f"{status}: {result['file']}")
        return

    status = click.style("Invalid", fg="red")
    click.echo(f"{status}: {result['file']}")
    for error in result["errors"]:
        if error["field"]:
            click.echo(f"  {error['field']}: {error['message']}")
        else:
            click.echo(f"  {error['message']}")
