"""
Logging configuration using structlog for structured, JSON-based logging.

Log events go to stderr so that command output on stdout (cipher text,
plain text) stays machine-readable. Modules log with
``structlog.get_logger(__name__)``; this module wires the processor
pipeline once at startup.
"""

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(log_level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure structured logging with JSON output.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO
        stream: Destination for log lines, stderr when omitted
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )
