"""Structured Logging — formatters surface record ids when present."""

import json
import logging

from condo.infrastructure.observability import (
    JSONFormatter, TextFormatter, setup_logging,
)


def _record(msg="Booking 3 committed", **extra):
    record = logging.LogRecord(
        "condo.services", logging.INFO, __file__, 1, msg, None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "condo.services"
    assert log["message"] == "Booking 3 committed"
    assert "timestamp" in log


def test_includes_known_extra_fields():
    log = json.loads(JSONFormatter().format(
        _record(facility_id=1, booking_id=3, time_slot="10:00-11:00"),
    ))
    assert log["facility_id"] == 1
    assert log["booking_id"] == 3
    assert log["time_slot"] == "10:00-11:00"


def test_omits_absent_and_unknown_fields():
    log = json.loads(JSONFormatter().format(_record(secret="x")))
    assert "invoice_id" not in log
    assert "secret" not in log


def test_text_formatter_appends_ids():
    line = TextFormatter().format(_record(invoice_id=7, payment_id=42))
    assert line.endswith("Booking 3 committed [invoice_id=7 payment_id=42]")


def test_setup_logging_replaces_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("debug", "json")
        setup_logging("debug", "json")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
