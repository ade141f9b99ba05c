"""JSON log formatting for muxplan.

One JSON object per line, so batch hosts can feed compile logs straight
into a log shipper and group them by source file.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries, plus the ones added by Formatter and
# FileContextFilter. Anything else on a record came in through extra=.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName", "file_path", "file_tag"}


class JSONFormatter(logging.Formatter):
    """Format log records as JSON objects.

    Keys:
    - timestamp: ISO-8601 UTC
    - level, logger, message
    - file: source file from file_context(), when set
    - context: values passed with extra=
    - exception: formatted traceback, when present
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        file_path = getattr(record, "file_path", None)
        if file_path:
            entry["file"] = file_path

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if extra:
            entry["context"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
