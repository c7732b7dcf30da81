"""Structlog processor that nests flat log fields into the service's JSON schema.

All field extraction uses dict.pop(key, default) so absent keys never raise.
"""

from __future__ import annotations

import os
from typing import Any

from opentelemetry import trace

_SERVICE_NAME_DEFAULT = "merge-conflict-analyzer"


def _build_root_fields(event_dict: dict[str, Any]) -> dict[str, Any]:
    return {
        "timestamp": event_dict.pop("timestamp", None),
        "level": event_dict.pop("level", "info"),
        "service": os.environ.get("SERVICE_NAME", _SERVICE_NAME_DEFAULT),
        "environment": os.environ.get("APP_ENV", "local"),
        "trace_id": event_dict.pop("trace_id", None),
        "span_id": event_dict.pop("span_id", None),
        "correlation_id": event_dict.pop("correlation_id", None),
        "message": event_dict.pop("event", ""),
    }


def _build_run(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    """Pipeline run identity: which PR of which repository this line belongs to."""
    run_id = event_dict.pop("run_id", None)
    if run_id is None and "pull_number" not in event_dict:
        return None
    return {
        "id": run_id,
        "type": event_dict.pop("event_type", None),
        "owner": event_dict.pop("owner", None),
        "repo": event_dict.pop("repo", None),
        "pull_number": event_dict.pop("pull_number", None),
    }


def _build_processing(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    status = event_dict.pop("processing_status", None)
    if status is None:
        return None
    duration = event_dict.pop("processing_duration_ms", None)
    return {
        "status": status,
        "duration_ms": float(duration) if isinstance(duration, int | float) else None,
    }


def _build_error(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    error_type = event_dict.pop("error_type", None)
    if error_type is None:
        return None
    return {
        "type": error_type,
        "code": event_dict.pop("error_code", None),
        "details": event_dict.pop("error_details", None),
        "retryable": event_dict.pop("error_retryable", False),
    }


def _build_context(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    endpoint = event_dict.pop("context_endpoint", None)
    component = event_dict.pop("context_component", None)
    if endpoint is None and component is None:
        return None
    return {
        "component": component,
        "endpoint": endpoint,
        "method": event_dict.pop("context_method", None),
        "github_event": event_dict.pop("github_event", None),
    }


def _inject_otel_ids(event_dict: dict[str, Any]) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")


def log_schema_processor(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Reshape structlog's flat event_dict into nested root/run/processing/error/context blocks."""
    _inject_otel_ids(event_dict)
    result = _build_root_fields(event_dict)
    for name, builder in (
        ("run", _build_run),
        ("processing", _build_processing),
        ("error", _build_error),
        ("context", _build_context),
    ):
        block = builder(event_dict)
        if block is not None:
            result[name] = block
    if event_dict:
        result["extra"] = dict(event_dict)
    return result
