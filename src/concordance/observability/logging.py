"""Log output for the concordance CLI.

Records always go to stderr; stdout is reserved for search results. JSON
lines carry the active trace/span ids so an ingest run can be followed from
its span down to the per-document messages.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import Any

import orjson

from concordance.observability.context import get_trace_context


TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Attributes every LogRecord has; anything else arrived through ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _encode_fallback(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value)
        except TypeError:
            return list(value)
    if isinstance(value, (Path, BaseException)):
        return str(value)
    return repr(value)


class JsonFormatter(logging.Formatter):
    """One orjson-encoded object per record."""

    MAX_MESSAGE_LEN = 2000

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if len(message) > self.MAX_MESSAGE_LEN:
            message = f"{message[: self.MAX_MESSAGE_LEN]}..."

        trace_ids = get_trace_context()
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": record.name.rpartition(".")[2],
            "message": message,
            "trace_id": trace_ids.get("trace_id", ""),
            "span_id": trace_ids.get("span_id", ""),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        return orjson.dumps(entry, default=_encode_fallback).decode("utf-8")


def _level_number(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(
    level: str = "info",
    json_output: bool = False,
    *,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Replace the root logger's handlers with a single stderr handler.

    ``logger_levels`` maps logger names to level names, e.g.
    ``{"concordance.search": "warning"}``.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_level_number(level))

    for name, override in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(_level_number(override))
