"""Structured logging setup."""
import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog with timestamps, log levels and a renderer.

    Logs go to stderr so command output on stdout stays machine readable.

    Args:
        level: Minimum level name (DEBUG shows SOAP envelopes)
        json_output: Render JSON lines instead of the console renderer
    """
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
