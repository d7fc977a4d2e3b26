"""Structured logging setup for the fusion and evaluation tooling.

Library modules only call ``structlog.get_logger(__name__)``; entry points
(``run_eval``, scripts) call ``configure_logging`` once at startup.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, List

import structlog
from structlog.stdlib import LoggerFactory, add_logger_name


def configure_logging(log_level: str = "INFO", log_format: str = "console", **context: Any) -> None:
    """Configure stdlib logging and structlog.

    - log_level: ``DEBUG``, ``INFO``, ``WARNING``, ``ERROR`` (case-insensitive)
    - log_format: ``json`` for machine-readable lines, ``console`` for humans
    - context: key/values bound to every log line (e.g. ``run="nightly"``)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_logger_name,
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    if context:
        structlog.contextvars.bind_contextvars(**context)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
