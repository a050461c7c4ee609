"""Structured JSON logging for gateway request and response handling"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

logger = logging.getLogger("mpg_gateway")

SERVICE_NAME = "mpg-gateway"

# Never emitted in clear text, even if passed via `extra`
REDACTED_FIELDS = frozenset({"transaction_secret", "signature", "card_no"})
REDACTED = "[REDACTED]"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp, service metadata and redaction"""

    def __init__(self, *args: Any, service_name: str = SERVICE_NAME, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name
        for key in log_record.keys() & REDACTED_FIELDS:
            log_record[key] = REDACTED


def setup_logging(level: str = "INFO", service_name: str = SERVICE_NAME) -> None:
    """Configure structured JSON logging"""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)


def log_form_generated(order_id: str, merchant_id: str, purchase_amount: str, currency: str) -> None:
    """Log that a signed request was produced (never the signature itself)"""
    logger.info(
        "Payment form generated",
        extra={
            "step": "form_generated",
            "order_id": order_id,
            "merchant_id": merchant_id,
            "purchase_amount": purchase_amount,
            "purchase_currency": currency,
        },
    )


def log_response_processed(order_id: str, response_code: str, outcome: str, reason_code: str) -> None:
    """Log normalized gateway response outcome"""
    logger.info(
        "Gateway response processed",
        extra={
            "step": "response_processed",
            "order_id": order_id,
            "response_code": response_code,
            "outcome": outcome,
            "reason_code": reason_code,
        },
    )


def log_signature_check(order_id: str, valid: bool, reason: str = "") -> None:
    """Log the result of a signature verification; mismatches are warnings"""
    level = logging.INFO if valid else logging.WARNING
    logger.log(
        level,
        "Signature verified" if valid else "Signature mismatch",
        extra={
            "step": "signature_check",
            "order_id": order_id,
            "signature_valid": valid,
            "mismatch_reason": reason,
        },
    )
