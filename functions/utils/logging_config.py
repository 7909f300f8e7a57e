"""
functions/utils/logging_config.py

structlog setup for the service.

Every module logs through structlog.get_logger(__name__) with snake_case
event names and keyword context. This module only decides the level
filter and the renderer; call configure_logging() once at startup.
"""

from __future__ import annotations

import logging

import structlog

from functions.utils.settings import Settings


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
