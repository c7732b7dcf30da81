"""Structlog-based logging configuration with a stdlib bridge.

Modules log through ``structlog.get_logger()``; configure_logging() wires the
processor chain and routes stdlib records through the same renderer.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from merge_conflict_analyzer.infrastructure.observability.logging.log_schema_processor import (
    log_schema_processor,
)
from merge_conflict_analyzer.infrastructure.observability.redaction_service import (
    redaction_processor,
)

_JSON_ENVIRONMENTS = ("qa", "staging", "prod", "production")
# Per-request INFO lines from these libraries duplicate our own collaborator logs.
_NOISY_LOGGERS = ("httpx", "httpcore")

_configured = False


def configure_logging(
    level: str = "INFO", log_format: str = "auto", environment: str = "local"
) -> None:
    """Configure structlog and route stdlib records (uvicorn, httpx) through it.

    Only the first call takes effect. ``log_format`` is ``json``, ``console``
    or ``auto``; ``auto`` picks JSON for deployed environments.
    """
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    json_output = _wants_json(log_format, environment)
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redaction_processor,
    ]
    if json_output:
        shared_processors.append(log_schema_processor)

    numeric_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def _wants_json(log_format: str, environment: str) -> bool:
    fmt = log_format.lower()
    if fmt in ("json", "console"):
        return fmt == "json"
    return environment.lower() in _JSON_ENVIRONMENTS
