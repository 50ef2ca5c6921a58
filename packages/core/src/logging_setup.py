"""Structured logging setup.

MCP uses stdout for protocol messages, so every log line goes to stderr.
"""

from __future__ import annotations

import logging
import sys

import structlog

from packages.core.src.config import HarmonicConfig, LogFormat

QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(config: HarmonicConfig) -> None:
    """Configure structlog and stdlib logging to write to stderr."""
    level = getattr(logging, config.log_level, logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    # httpx logs full request URLs at INFO, which can carry the API key
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.log_format == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
