from merge_conflict_analyzer.core.application.ports import AnalysisIngestionPort
from merge_conflict_analyzer.core.domain.analysis import AnalysisOutput
from merge_conflict_analyzer.infrastructure.tools.common.base_http_client import BaseHttpClient
from merge_conflict_analyzer.infrastructure.tools.services.config.services_settings import (
    ServicesSettings,
)


class AnalysisIngestionClient(BaseHttpClient, AnalysisIngestionPort):
    provider = "AnalysisService"

    def __init__(self, settings: ServicesSettings) -> None:
        super().__init__(timeout=settings.timeout_seconds)
        self._url = settings.analysis_service_url

    async def send_analysis(self, output: AnalysisOutput) -> None:
        response = await self._post(self._url, {"analysis": output.to_payload()})
        self._ensure_success("POST", self._url, response)
