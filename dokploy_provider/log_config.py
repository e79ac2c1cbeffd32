"""structlog setup shared by the HTTP service and the CLI."""

from __future__ import annotations

import logging
import sys

import structlog

from dokploy_client.config import Settings


def configure_logging(settings: Settings) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # stdout carries command output
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )
