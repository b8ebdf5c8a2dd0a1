"""
logging_config.py - Centralized JSON Logging Configuration

PURPOSE:
    Provides structured JSON logging for the product, recommendation and review
    services with timezone-aware timestamps and service-specific context.

KEY FEATURES:
    - JSON Format: All logs are formatted as JSON for easy parsing and aggregation
    - Timezone Aware: Timestamps use the zone named by LOG_TIMEZONE (default UTC)
    - Service Context: Automatically adds service_name to all log entries
    - Request Context: Optional product_id / path fields for request diagnostics
    - Exception Handling: Full stack traces included in log entries

JSON LOG FIELDS:
    - timestamp: ISO 8601 format (e.g., "2026-02-23T22:48:51.001014+00:00")
    - level: Log level (INFO, ERROR, WARNING, DEBUG, CRITICAL)
    - logger: Module name where log originated (e.g., "services.product_service.service")
    - message: The actual log message
    - service_name: Name of the microservice (injected automatically)
    - product_id: Optional natural key being processed
    - path: Optional request path (set by the exception handlers)
    - exception: Full stack trace (only when exc_info is attached)

USAGE:
    from shared.logging_config import setup_logging
    setup_logging("product-service", level="INFO")

    logger = logging.getLogger(__name__)
    logger.info("Will get product info for id=1", extra={"product_id": 1})

EXAMPLE JSON OUTPUT:
    {
        "timestamp": "2026-02-23T22:48:51.001014+00:00",
        "level": "INFO",
        "logger": "services.product_service.service",
        "message": "Will get product info for id=1",
        "service_name": "product-service",
        "product_id": 1
    }

DESIGN NOTES:
    - JsonFormatter: Custom Formatter extending logging.Formatter for JSON output
    - ServiceFilter: Handler-level filter that injects service_name into every record,
      including records propagated from child loggers
    - Calling setup_logging again replaces the previously installed handler, so
      several services can be imported into one process (tests) without
      duplicated output
"""

import json
import logging
import os
import sys
from datetime import datetime
from zoneinfo import ZoneInfo
from typing import Any, Dict

LOG_TIMEZONE = ZoneInfo(os.getenv("LOG_TIMEZONE", "UTC"))

# Optional record attributes copied into the JSON payload
CONTEXT_FIELDS = ("service_name", "product_id", "path")


class JsonFormatter(logging.Formatter):
    """Custom formatter that outputs JSON logs with service context."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(LOG_TIMEZONE).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ServiceFilter(logging.Filter):
    """Add service name to all logs passing through the handler."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


def setup_logging(service_name: str, level: str = "INFO") -> None:
    """Setup JSON logging for a service."""
    logger = logging.getLogger()
    logger.setLevel(level)

    for existing in list(logger.handlers):
        if isinstance(existing.formatter, JsonFormatter):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(ServiceFilter(service_name))
    logger.addHandler(handler)
