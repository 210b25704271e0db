"""
Structured logging configuration for the API.

JSON logs in production (one object per line, tagged with the service name),
plain text during development. Modules log through logging.getLogger(__name__).
"""

import logging
import sys
from typing import Any, Dict, Optional
from pythonjsonlogger.json import JsonFormatter

JSON_FORMAT = '%(levelname)s %(name)s %(module)s %(funcName)s %(message)s'

# Standard LogRecord attribute -> key in the emitted JSON object
RENAMED_FIELDS = {
    "levelname": "level",
    "name": "logger",
    "funcName": "function",
}

# Third-party loggers that are too chatty at the application level
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "alembic": logging.INFO,
    "uvicorn.access": logging.WARNING,
}


class EmployeeJsonFormatter(JsonFormatter):
    """
    JSON formatter that records the source location of warnings and errors.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        if record.levelno >= logging.WARNING:
            log_record['line'] = record.lineno
            log_record['pathname'] = record.pathname


def build_formatter(json_logs: bool, service_name: Optional[str] = None) -> logging.Formatter:
    """
    Create the formatter used by the console handler.

    Args:
        json_logs: JSON objects (production) or human-readable lines (development)
        service_name: Added as a `service` field to every JSON record
    """
    if not json_logs:
        return logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    return EmployeeJsonFormatter(
        JSON_FORMAT,
        rename_fields=RENAMED_FIELDS,
        static_fields={"service": service_name} if service_name else None,
        timestamp=True,
    )


def setup_logging(log_level: str = "INFO", json_logs: bool = True, service_name: Optional[str] = None) -> None:
    """
    Configure root logging for the application.

    Replaces any handlers already on the root logger with a single stdout handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to use JSON formatting
        service_name: Service tag for JSON records
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(build_formatter(json_logs, service_name))

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
