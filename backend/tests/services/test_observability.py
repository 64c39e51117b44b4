"""Structured logging - JSONFormatter output and setup_logging idempotence."""

import json
import logging

from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "app.services.chrome_layout", logging.WARNING, __file__, 1,
        "Could not read footer_configuration", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_structured_fields():
    line = JSONFormatter().format(
        _record(tenant_id="store-1", setting_key="footer_configuration", sequence=3),
    )
    log = json.loads(line)
    assert log["level"] == "WARNING"
    assert log["tenant_id"] == "store-1"
    assert log["setting_key"] == "footer_configuration"
    assert log["sequence"] == 3
    assert "surface" not in log


def test_json_formatter_ignores_unlisted_extras():
    log = json.loads(JSONFormatter().format(_record(secret="x")))
    assert "secret" not in log


def test_setup_logging_does_not_stack_handlers():
    root = logging.getLogger()
    original_handlers, original_level = list(root.handlers), root.level
    try:
        first = setup_logging("DEBUG", "json")
        second = setup_logging("WARNING", "text")
        assert first not in root.handlers
        assert second in root.handlers
        assert root.level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        root.handlers[:] = original_handlers
        root.setLevel(original_level)
