"""Unit tests for structured JSON logging"""

import json
import logging
from mpg_gateway.infrastructure.observability.logging import (
    REDACTED,
    CustomJsonFormatter,
    setup_logging,
)


def _format(extra: dict) -> dict:
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s", service_name="mpg-test")
    record = logging.LogRecord("mpg_gateway", logging.INFO, __file__, 1, "Payment form generated", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return json.loads(formatter.format(record))


def test_formatter_adds_service_metadata():
    payload = _format({"order_id": "ORD100"})

    assert payload["message"] == "Payment form generated"
    assert payload["level"] == "INFO"
    assert payload["service"] == "mpg-test"
    assert payload["order_id"] == "ORD100"
    assert "timestamp" in payload


def test_formatter_redacts_sensitive_fields():
    payload = _format({"transaction_secret": "s3cret", "signature": "abc=", "card_no": "4111111111111111"})

    assert payload["transaction_secret"] == REDACTED
    assert payload["signature"] == REDACTED
    assert payload["card_no"] == REDACTED


def test_setup_logging_installs_single_json_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("DEBUG")
        setup_logging("WARNING")

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
