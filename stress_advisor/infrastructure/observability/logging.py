"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List

from pythonjsonlogger.json import JsonFormatter

from stress_advisor.config import settings


class CustomJsonFormatter(JsonFormatter):
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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_stress_summary(
    request_id: str,
    stress_score: int,
    risk_level: str,
    pressure_sources: List[str],
    duration_ms: float,
) -> None:
    """Log structured scoring outcome (scores only, never raw household figures)"""
    logging.info(
        "Stress summary completed",
        extra={
            "request_id": request_id,
            "step": "summary_complete",
            "stress_score": stress_score,
            "risk_level": risk_level,
            "pressure_sources": pressure_sources,
            "duration_ms": duration_ms,
        },
    )


def log_simulation(
    request_id: str,
    delta_stress_score: int,
    survival_months: int,
    duration_ms: float,
) -> None:
    """Log structured scenario comparison outcome"""
    logging.info(
        "Scenario simulation completed",
        extra={
            "request_id": request_id,
            "step": "simulate_complete",
            "delta_stress_score": delta_stress_score,
            "survival_months": survival_months,
            "duration_ms": duration_ms,
        },
    )


def log_explanation(request_id: str, explain_type: str, source: str, duration_ms: float) -> None:
    """Log which path (model or fallback) produced an explanation"""
    logging.info(
        "Explanation completed",
        extra={
            "request_id": request_id,
            "step": "explain_complete",
            "explain_type": explain_type,
            "source": source,
            "duration_ms": duration_ms,
        },
    )
