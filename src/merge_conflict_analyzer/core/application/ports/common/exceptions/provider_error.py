from __future__ import annotations

from dataclasses import dataclass

from merge_conflict_analyzer.core.application.ports.common.exceptions.infra_error import InfraError


@dataclass(frozen=False)
class ProviderError(InfraError):
    """An HTTP collaborator (GitHub, registry, settings, ingestion) failed."""

    provider: str
    message: str
    retryable: bool = False
    status_code: int | None = None

    def __str__(self) -> str:
        code = f" status={self.status_code}" if self.status_code is not None else ""
        return f"{self.provider}: {self.message}{code}"


def is_transient(exc: BaseException) -> bool:
    """True for provider failures worth retrying (transport errors, 5xx, 429)."""
    return isinstance(exc, ProviderError) and exc.retryable
