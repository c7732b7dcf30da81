from merge_conflict_analyzer.core.application.ports.common.exceptions.command_error import (
    CommandExecutionError,
    CommandTimeoutError,
)
from merge_conflict_analyzer.core.application.ports.common.exceptions.infra_error import InfraError
from merge_conflict_analyzer.core.application.ports.common.exceptions.provider_error import (
    ProviderError,
    is_transient,
)

__all__ = [
    "CommandExecutionError",
    "CommandTimeoutError",
    "InfraError",
    "ProviderError",
    "is_transient",
]
