"""
Logging Setup
=============
Structured logging configuration for services that verify signed requests.

Usage:
    from apisign_core.log_setup import setup_logging

    # Setup at startup
    setup_logging(service_name="orders-api")
"""

import logging
import sys
from typing import Optional

import structlog


def setup_logging(
    service_name: str,
    level: str = "INFO",
    json_output: bool = True,
):
    """
    Configure structlog and the stdlib root logger for a service.

    Args:
        service_name: Name of the service (bound to every log line)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to output JSON (for production)

    Returns:
        Logger bound to the service name
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=service_name)

    logger = structlog.get_logger(service_name)
    logger.info("logging_configured", level=level.upper(), json_output=json_output)
    return logger


def bind_request_context(
    request_id: Optional[str] = None,
    key_id: Optional[str] = None,
) -> None:
    """Bind per-request fields so every log line in the request carries them."""
    values = {}
    if request_id:
        values["request_id"] = request_id
    if key_id:
        values["key_id"] = key_id
    if values:
        structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    """Drop per-request fields, keeping the service binding."""
    structlog.contextvars.unbind_contextvars("request_id", "key_id")
