"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from origination_gateway.config import settings


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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def mask_id_number(id_number: str) -> str:
    """Keep only the first and last two characters of an ID number"""
    if len(id_number) <= 4:
        return "*" * len(id_number)
    return id_number[:2] + "*" * (len(id_number) - 4) + id_number[-2:]


def log_id_check(
    request_id: str,
    id_number: str,
    valid: bool,
    duration_ms: float,
) -> None:
    """Log ID verification outcome without exposing the full ID number"""
    logging.info(
        "ID number checked",
        extra={
            "request_id": request_id,
            "id_number": mask_id_number(id_number),
            "step": "id_check_complete",
            "id_outcome": "valid" if valid else "invalid",
            "duration_ms": duration_ms,
        },
    )


def log_assessment(
    request_id: str,
    application_id: str,
    income_band: str,
    surplus: float,
    expenses_below_norms: bool,
    duration_ms: float,
) -> None:
    """Log structured affordability outcome for analysis"""
    logging.info(
        "Affordability assessed",
        extra={
            "request_id": request_id,
            "application_id": application_id,
            "step": "assessment_complete",
            "income_band": income_band,
            "surplus": surplus,
            "norms_outcome": "below_norms" if expenses_below_norms else "within_norms",
            "duration_ms": duration_ms,
        },
    )


def log_loan_quote(
    request_id: str,
    principal: float,
    term_in_days: int,
    total_repayment: float,
) -> None:
    logging.info(
        "Loan quoted",
        extra={
            "request_id": request_id,
            "step": "loan_quote_complete",
            "principal": principal,
            "term_in_days": term_in_days,
            "total_repayment": total_repayment,
        },
    )


def log_funeral_quote(
    request_id: str,
    benefit_option: str,
    extended_family_count: int,
    total_premium: float,
    duration_ms: float,
) -> None:
    logging.info(
        "Funeral cover quoted",
        extra={
            "request_id": request_id,
            "step": "funeral_quote_complete",
            "benefit_option": benefit_option,
            "extended_family_count": extended_family_count,
            "total_premium": total_premium,
            "duration_ms": duration_ms,
        },
    )
