"""Structured Logging: JSON formatter and engine logger setup.

Invariants:
    - Every JSON line carries timestamp (record creation time, UTC), level,
      logger, message and the emitting location
    - Engine extras (field_id, event_name, handler_count, outcome, error_code)
      appear only when set on the record
    - setup_logging configures the "fieldscript" logger only; the host's root
      logger is left alone
    - Repeated setup_logging calls replace the engine handler, never stack it

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - Level and format default to Settings so FIELDSCRIPT_LOG_LEVEL /
      FIELDSCRIPT_LOG_FORMAT take effect without host wiring
"""

import json
import logging
from datetime import datetime, timezone

from fieldscript.config import get_settings

ENGINE_LOGGER = "fieldscript"

EXTRA_KEYS = (
    "field_id", "event_name", "handler_count", "outcome", "error_code",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(field_id)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "location": f"{record.module}:{record.lineno}",
            "message": record.getMessage(),
        }
        payload.update(
            (key, record.__dict__[key])
            for key in EXTRA_KEYS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class _FieldIdDefault(logging.Filter):
    """Text format references %(field_id)s; records without one get "-"."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "field_id", None) is None:
            record.field_id = "-"
        return True


def setup_logging(
    level: str | None = None, fmt: str | None = None,
) -> logging.Handler:
    """Attach a stream handler to the engine logger. Returns the handler.

    Unspecified level / format come from get_settings().
    """
    if level is None or fmt is None:
        settings = get_settings()
        level = level or settings.log_level
        fmt = fmt or settings.log_format

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.addFilter(_FieldIdDefault())
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler._fieldscript_engine = True

    engine_logger = logging.getLogger(ENGINE_LOGGER)
    for old in list(engine_logger.handlers):
        if getattr(old, "_fieldscript_engine", False):
            engine_logger.removeHandler(old)
    engine_logger.addHandler(handler)
    engine_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
