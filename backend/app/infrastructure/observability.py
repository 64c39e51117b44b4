"""Structured Logging - JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields in STRUCTURED_FIELDS (tenant, setting key, save sequence, ...)
      surfaced when present
    - JSON format in production, human-readable in development
    - setup_logging is idempotent: calling it twice does not duplicate output

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency
    - SQLAlchemy engine and uvicorn access logs pinned to WARNING so per-request
      chrome renders do not flood the stream
"""

import logging
import json
from datetime import datetime, timezone

STRUCTURED_FIELDS: tuple[str, ...] = (
    "tenant_id", "setting_key", "surface", "field",
    "error_code", "sequence", "path",
)

NOISY_LOGGERS: tuple[str, ...] = ("sqlalchemy.engine", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key]
            for key in STRUCTURED_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class _ChromeLayoutHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    for existing in list(logging.root.handlers):
        if isinstance(existing, _ChromeLayoutHandler):
            logging.root.removeHandler(existing)

    handler = _ChromeLayoutHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(tenant_id)s] %(message)s",
            defaults={"tenant_id": "-"},
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
