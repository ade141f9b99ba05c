"""Load probe reports written by `ffprobe -print_format json -show_streams`.

Probing itself happens outside muxplan; this module only reads the JSON a
caller already captured.
"""

import json
import logging
from pathlib import Path
from typing import Any

from muxplan.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def load_probe_file(path: Path) -> dict[str, Any]:
    """Read an ffprobe JSON report from disk.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed probe data.

    Raises:
        InvalidInputError: If the file is missing, unreadable, or not a
            JSON object.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidInputError(f"Cannot read probe file: {e}", str(path)) from e

    return load_probe_json(content, source=str(path))


def load_probe_json(content: str, source: str | None = None) -> dict[str, Any]:
    """Parse an ffprobe JSON report.

    Args:
        content: JSON text.
        source: Optional identifier used in error messages.

    Returns:
        Parsed probe data.

    Raises:
        InvalidInputError: If the content is not a JSON object.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid probe JSON: {e}", source) from e

    if not isinstance(data, dict):
        raise InvalidInputError("Probe JSON must be an object", source)

    logger.debug("Loaded probe report with %d streams", len(data.get("streams") or []))
    return data
