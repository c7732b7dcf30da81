"""Secret scrubbing for log events, subprocess output and error messages.

Clone URLs carry the GitHub token as basic-auth userinfo, and git echoes the
URL back on failure, so anything that reaches a log line passes through here.
"""

import re
from collections.abc import Mapping, MutableMapping
from typing import Any

REDACTED = "[REDACTED]"

# Each pattern keeps group 1 and replaces the rest of the match.
_SECRET_PATTERNS = [
    re.compile(r"(://[^:/@\s]+:)[^@\s]+(?=@)"),
    re.compile(r"(\bBearer\s+)[\w\-.~+/=]+", re.IGNORECASE),
    re.compile(r"(\btoken\s+)[\w\-.~+/=]+", re.IGNORECASE),
    re.compile(r"(\b)gh[pousr]_[A-Za-z0-9]{20,}"),
    re.compile(r"(\bsha256=)[0-9a-f]{64}"),
]

_SENSITIVE_KEY_PARTS = ("authorization", "token", "password", "secret", "signature")


def redact_text(text: str) -> str:
    """Replace credentials found in free text."""
    if not text:
        return text
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(rf"\g<1>{REDACTED}", text)
    return text


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(part in lowered for part in _SENSITIVE_KEY_PARTS)


def redact_mapping(obj: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively blank sensitive keys and scrub string values."""
    return {
        key: REDACTED if is_sensitive_key(str(key)) else _redact_value(value)
        for key, value in obj.items()
    }


def _redact_value(value: Any) -> Any:
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, Mapping):
        return redact_mapping(value)
    if isinstance(value, list | tuple):
        return [_redact_value(item) for item in value]
    return value


def redaction_processor(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor applying redact_mapping to every event."""
    return redact_mapping(event_dict)
