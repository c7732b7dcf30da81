from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from merge_conflict_analyzer.core.application.ports.common.exceptions import is_transient

_T = TypeVar("_T")

logger = structlog.get_logger()


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        "Collaborator call failed, retrying",
        attempt=state.attempt_number,
        wait_seconds=round(state.next_action.sleep, 2) if state.next_action else None,
        error_type=type(exc).__name__ if exc else None,
        error_details=str(exc) if exc else None,
        error_retryable=True,
    )


@dataclass(frozen=True)
class RetryPolicy:
    """Retries idempotent HTTP calls that failed with a retryable ProviderError.

    Waits grow exponentially with jitter between ``initial_wait`` and
    ``max_wait``; the last error is re-raised once attempts run out.
    """

    max_attempts: int = 3
    initial_wait: float = 0.25
    max_wait: float = 5.0

    async def run(self, fn: Callable[[], Awaitable[_T]]) -> _T:
        return await self._retrying()(fn)

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception(is_transient),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(initial=self.initial_wait, max=self.max_wait),
            before_sleep=_log_retry,
            reraise=True,
        )
