"""Tests for structlog configuration helpers."""

import io
import json
import logging

import pytest
import structlog
from asgi_correlation_id.context import correlation_id

from construction_stages.core.logging import add_correlation_id, configure_structlog

pytestmark = pytest.mark.unit


def test_add_correlation_id_injects_current_request_id():
    token = correlation_id.set("req-abc")
    try:
        event = add_correlation_id(None, "info", {"event": "stage_created"})
    finally:
        correlation_id.reset(token)
    assert event == {"event": "stage_created", "correlation_id": "req-abc"}


def test_add_correlation_id_outside_request():
    assert add_correlation_id(None, "info", {"event": "startup_begin"}) == {"event": "startup_begin"}


def test_configure_structlog_sets_levels():
    configure_structlog(log_level="WARNING", json_logs=True, log_sql=True)
    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO


def test_json_logs_render_exception_traceback():
    configure_structlog(log_level="INFO", json_logs=True)
    buffer = io.StringIO()
    handler = logging.StreamHandler(buffer)
    formatter = next(
        h.formatter for h in logging.getLogger().handlers if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    )
    handler.setFormatter(formatter)
    stdlib_logger = logging.getLogger("construction_stages.tests.exc")
    stdlib_logger.addHandler(handler)
    stdlib_logger.propagate = False
    try:
        try:
            1 / 0
        except ZeroDivisionError:
            structlog.get_logger("construction_stages.tests.exc").error("unhandled_exception", exc_info=True)
    finally:
        stdlib_logger.removeHandler(handler)

    event = json.loads(buffer.getvalue())
    assert event["event"] == "unhandled_exception"
    assert "ZeroDivisionError" in event["exception"]
