"""Structured JSON logging for iDEAL API calls"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from ideal_gateway.config import settings

log = logging.getLogger("ideal_gateway")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_api_call(
    operation: str,
    status_code: Optional[int],
    outcome: str,
    duration_ms: float,
) -> None:
    """Log structured outcome of one iDEAL API call"""
    log.info(
        "iDEAL call completed",
        extra={
            "operation": operation,
            "status_code": status_code,
            "outcome": outcome,
            "duration_ms": duration_ms,
        },
    )


def log_response_body(operation: str, body: bytes) -> None:
    """Trace a raw response body at DEBUG before it is decoded"""
    log.debug(
        "iDEAL response body",
        extra={
            "operation": operation,
            "body": body.decode("utf-8", errors="replace"),
        },
    )
