"""Structured Logging — JSON and text formatters carrying booking/invoice/payment ids.

Invariants:
    - Every line has timestamp (record creation, UTC), level, logger, message
    - Record ids passed via `extra=` (facility_id, booking_id, invoice_id,
      payment_id, time_slot) and error_code/path appear only when set
    - setup_logging is idempotent: calling it again replaces, never stacks, handlers

Design Decisions:
    - stdlib logging with module loggers; services pass ids through `extra=`
    - Text format shows the same ids as a trailing [key=value] block
"""

import json
import logging
from datetime import datetime, timezone


_EXTRA_FIELDS = (
    "facility_id", "booking_id", "invoice_id", "payment_id",
    "time_slot", "error_code", "path",
)


def _record_extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in _EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_record_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local development."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _record_extras(record)
        if extras:
            line += " [" + " ".join(f"{k}={v}" for k, v in extras.items()) + "]"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # statement echo is opt-in through SQLAlchemy's own echo flag
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
