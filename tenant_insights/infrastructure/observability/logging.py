"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from tenant_insights.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
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


def log_assessment(
    request_id: str,
    owner_id: str,
    tenant_id: str,
    risk_level: str,
    payment_reliability: int,
) -> None:
    """Log a tenant behavior assessment for later analysis"""
    logging.info(
        "Tenant assessed",
        extra={
            "request_id": request_id,
            "owner_id": owner_id,
            "tenant_id": tenant_id,
            "step": "assessment_complete",
            "risk_level": risk_level,
            "payment_reliability": payment_reliability,
        },
    )


def log_screening(
    request_id: str,
    owner_id: str,
    tenant_id: str,
    unit_id: str,
    risk_level: str,
    risk_score: int,
    duration_ms: float,
) -> None:
    """Log screening outcome (scores only, never the raw check results)"""
    logging.info(
        "Screening completed",
        extra={
            "request_id": request_id,
            "owner_id": owner_id,
            "tenant_id": tenant_id,
            "unit_id": unit_id,
            "step": "screening_complete",
            "risk_level": risk_level,
            "risk_score": risk_score,
            "duration_ms": duration_ms,
        },
    )
