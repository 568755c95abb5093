"""Structured JSON logging for report generation"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from portfolio_insights.config import settings


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

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_report_generated(
    request_id: str,
    grade: str,
    risk_level: str,
    alert_ids: list[str],
    recommendation_count: int,
    duration_ms: float,
) -> None:
    """Log structured report outcome for analysis"""
    logging.getLogger("portfolio_insights.report").info(
        "Report generated",
        extra={
            "request_id": request_id,
            "step": "report_complete",
            "health_grade": grade,
            "risk_level": risk_level,
            "alert_ids": alert_ids,
            "recommendation_count": recommendation_count,
            "duration_ms": duration_ms,
        },
    )


def log_export(request_id: str, filename: str, size_bytes: int) -> None:
    logging.getLogger("portfolio_insights.export").info(
        "CSV export generated",
        extra={
            "request_id": request_id,
            "step": "export_complete",
            "filename": filename,
            "size_bytes": size_bytes,
        },
    )
