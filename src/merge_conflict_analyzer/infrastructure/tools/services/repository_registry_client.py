import structlog

from merge_conflict_analyzer.core.application.ports import RepositoryRegistryPort
from merge_conflict_analyzer.infrastructure.common.retry.retry_policy import RetryPolicy
from merge_conflict_analyzer.infrastructure.tools.common.base_http_client import BaseHttpClient
from merge_conflict_analyzer.infrastructure.tools.services.config.services_settings import (
    ServicesSettings,
)

logger = structlog.get_logger()


class RepositoryRegistryClient(BaseHttpClient, RepositoryRegistryPort):
    provider = "RepositoryService"

    def __init__(self, settings: ServicesSettings, retry: RetryPolicy | None = None) -> None:
        super().__init__(timeout=settings.timeout_seconds, retry=retry)
        self._url = settings.repo_service_url

    async def is_registered(self, owner: str, repo: str) -> bool:
        response = await self._get(self._url, params={"owner": owner, "repo": repo})
        if response.status_code == 404:
            return False
        if not response.is_success:
            raise self._status_error("GET", self._url, response)
        return True

    async def register(self, owner: str, repo: str) -> bool:
        response = await self._post(self._url, {"repo": {"owner": owner, "repo": repo}})
        if not response.is_success:
            logger.warning(
                "Repository registration rejected",
                owner=owner,
                repo=repo,
                status_code=response.status_code,
            )
            return False
        return True
