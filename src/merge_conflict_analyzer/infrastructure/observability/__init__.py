from .logger_factory_service import configure_logging
from .redaction_service import redact_mapping, redact_text, redaction_processor

__all__ = [
    "configure_logging",
    "redact_mapping",
    "redact_text",
    "redaction_processor",
]
