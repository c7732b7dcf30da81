from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

_T = TypeVar("_T")


def _never(_exc: BaseException) -> bool:
    return False


@dataclass(frozen=True)
class BoundedRetry:
    """Poll an async call a bounded number of times with a delay between attempts.

    The wait strategy defaults to a fixed delay; pass any tenacity wait (for
    example ``wait_exponential``) to change the backoff without touching
    call sites.
    """

    max_attempts: int = 5
    delay_seconds: float = 3.0
    wait: Any = None
    retry_on: Callable[[BaseException], bool] = _never

    async def poll(
        self, fn: Callable[[], Awaitable[_T]], until: Callable[[_T], bool]
    ) -> _T | None:
        """Return the first result satisfying ``until``, or None once the budget is spent."""
        try:
            return await self._retrying(until)(fn)
        except RetryError as err:
            if err.last_attempt.failed:
                raise err.last_attempt.exception() from err  # type: ignore[misc]
            return None

    def _retrying(self, until: Callable[[Any], bool]) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(max(1, self.max_attempts)),
            wait=self.wait if self.wait is not None else wait_fixed(self.delay_seconds),
            retry=retry_if_result(lambda result: not until(result))
            | retry_if_exception(self.retry_on),
        )
