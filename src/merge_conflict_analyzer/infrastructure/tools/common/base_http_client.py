"""Shared httpx plumbing for every outbound collaborator client.

Transport failures and 5xx/429 responses become retryable ProviderErrors;
other 4xx responses are returned to the caller, which decides what a 404 means.
"""

from typing import Any

import httpx
import structlog

from merge_conflict_analyzer.core.application.ports.common.exceptions import ProviderError
from merge_conflict_analyzer.infrastructure.common.retry.retry_policy import RetryPolicy
from merge_conflict_analyzer.infrastructure.observability.metrics_service import HTTP_CALLS_TOTAL
from merge_conflict_analyzer.infrastructure.observability.redaction_service import redact_text

logger = structlog.get_logger()

_RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class BaseHttpClient:
    provider: str = "HTTP"

    def __init__(self, timeout: float, retry: RetryPolicy | None = None) -> None:
        self._timeout = timeout
        self._retry = retry or RetryPolicy()

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    async def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        return await self._retry.run(lambda: self._send("GET", url, params=params))

    async def _post(self, url: str, json_data: dict[str, Any]) -> httpx.Response:
        return await self._send("POST", url, json_data=json_data)

    async def _send(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method, url, headers=self._headers(), params=params, json=json_data
                )
        except httpx.HTTPError as exc:
            HTTP_CALLS_TOTAL.labels(provider=self.provider, outcome="transport_error").inc()
            raise ProviderError(
                provider=self.provider,
                message=f"{method} {redact_text(url)} failed: {type(exc).__name__}: {exc}",
                retryable=True,
            ) from exc

        if response.status_code in _RETRYABLE_STATUS:
            HTTP_CALLS_TOTAL.labels(provider=self.provider, outcome="server_error").inc()
            raise self._status_error(method, url, response, retryable=True)
        HTTP_CALLS_TOTAL.labels(
            provider=self.provider, outcome="success" if response.is_success else "client_error"
        ).inc()
        return response

    def _status_error(
        self, method: str, url: str, response: httpx.Response, retryable: bool = False
    ) -> ProviderError:
        return ProviderError(
            provider=self.provider,
            message=f"{method} {redact_text(url)} returned {response.status_code}: "
            f"{redact_text(response.text[:500])}",
            retryable=retryable,
            status_code=response.status_code,
        )

    def _ensure_success(self, method: str, url: str, response: httpx.Response) -> None:
        if not response.is_success:
            raise self._status_error(method, url, response)

    def _require_success(self, method: str, url: str, response: httpx.Response) -> Any:
        """Raise on non-2xx, else the decoded JSON body (None when empty).

        A 2xx body that is not JSON raises ValueError.
        """
        self._ensure_success(method, url, response)
        return response.json() if response.content else None
