import json
import logging

import structlog

from square_payments.core.logging import configure_logging, get_logger


def test_configure_logging_emits_json(caplog):
    caplog.set_level(logging.INFO)
    configure_logging(logging.INFO)
    try:
        structlog.get_logger("square_payments.test").info("square.payment.authorized", order_code="ORD1")
    finally:
        structlog.reset_defaults()

    event = json.loads(caplog.records[-1].getMessage())
    assert event["event"] == "square.payment.authorized"
    assert event["order_code"] == "ORD1"
    assert event["level"] == "info"
    assert "timestamp" in event


def test_get_logger_defaults_to_package_name():
    logger = get_logger()

    assert logger is not None
