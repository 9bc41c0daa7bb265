"""JSON log output for the problem mapper's loggers.

Records logged by the middleware carry the request path, method and status
code as ``extra`` fields; :class:`JsonFormatter` keeps them as structured
members instead of folding them into the message.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Final

# attributes every LogRecord has; anything else came in through ``extra=``
_RECORD_ATTRS: Final[frozenset[str]] = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

PACKAGE_LOGGER: Final[str] = "http_problem_mapper"


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        document: dict[str, Any] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS and not key.startswith("_")}
        if extra:
            document["extra"] = extra
        if record.exc_info:
            document["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            document["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(document, default=str)


def configure_logging(level: str | None = None, logger_name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Send ``logger_name`` records to stderr as JSON.

    The level defaults to ``LOG_LEVEL`` (``INFO`` when unset). Calling this
    again replaces the handler installed by an earlier call.
    """

    target = logging.getLogger(logger_name)
    for handler in list(target.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            target.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    target.addHandler(handler)
    target.setLevel((level or os.environ.get("LOG_LEVEL", "INFO")).upper())
    return target


__all__ = ["JsonFormatter", "configure_logging", "PACKAGE_LOGGER"]
