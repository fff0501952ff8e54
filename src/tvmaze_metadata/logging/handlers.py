"""JSON log output.

One JSON object per line. The lookup context and the diagnostics the
matching engine attaches through ``extra=`` become top-level keys, so log
processors can filter by show or collect ambiguity reports without
parsing message text.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Set by LookupContextFilter
LOOKUP_FIELDS = ("show_id", "file_path")

# Passed as extra= by the resolver
DIAGNOSTIC_FIELDS = ("episode_id", "candidates", "total", "suggested_filename")


class JSONFormatter(logging.Formatter):
    """Render records as single-line JSON.

    Only the known lookup and diagnostic fields are emitted; other
    ``extra`` values are ignored.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in LOOKUP_FIELDS + DIAGNOSTIC_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
