import structlog

from merge_conflict_analyzer.core.application.ports import SettingsPort
from merge_conflict_analyzer.core.domain.merge import PrSettings
from merge_conflict_analyzer.infrastructure.common.retry.retry_policy import RetryPolicy
from merge_conflict_analyzer.infrastructure.tools.common.base_http_client import BaseHttpClient
from merge_conflict_analyzer.infrastructure.tools.services.config.services_settings import (
    ServicesSettings,
)

logger = structlog.get_logger()


class SettingsClient(BaseHttpClient, SettingsPort):
    """Reads the per-PR entry point (main class/method) from the settings service."""

    provider = "SettingsService"

    def __init__(self, settings: ServicesSettings, retry: RetryPolicy | None = None) -> None:
        super().__init__(timeout=settings.timeout_seconds, retry=retry)
        self._url = settings.settings_service_url

    async def get_settings(self, owner: str, repo: str, pull_number: int) -> PrSettings | None:
        response = await self._get(
            self._url, params={"owner": owner, "repo": repo, "pull_number": pull_number}
        )
        if response.status_code == 404:
            return None
        try:
            payload = self._require_success("GET", self._url, response)
            return PrSettings.model_validate(payload) if payload else None
        except ValueError as exc:
            # Undecodable bodies and pydantic ValidationErrors alike
            logger.warning(
                "Ignoring malformed PR settings",
                error_type=type(exc).__name__,
                error_details=str(exc)[:500],
            )
            return None
