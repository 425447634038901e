"""Logging setup for the command line.

Plain text by default; ``json_format`` switches to one JSON object per
line for log shippers.
"""

import logging
import sys
from datetime import datetime, UTC
from typing import Any

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "moneytrack"
HANDLER_NAME = "moneytrack-stderr"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter with timestamp, level and service metadata."""

    def add_fields(
        self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict[str, Any]
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(UTC).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def setup_logging(level: str = "WARNING", json_format: bool = False) -> None:
    """Configure the root logger to write to stderr.

    Calling it again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    for existing in [h for h in logger.handlers if h.get_name() == HANDLER_NAME]:
        logger.removeHandler(existing)
        existing.close()

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    if json_format:
        handler.setFormatter(ServiceJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)
