"""structlog setup for the process.

Console rendering for development, one JSON object per line otherwise.
Modules log through ``structlog.get_logger(__name__)`` with dotted event
names (``order.created``) and keyword context.
"""

from __future__ import annotations

import logging
import sys

import structlog

from storefront.domain.exceptions import ConfigurationError


def _stderr_logger(*args: object) -> structlog.PrintLogger:
    # sys.stderr is looked up per call, never bound at configure time.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f"Unknown log level: {level!r}")

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
