import json

import httpx
import pytest
import respx

from merge_conflict_analyzer.core.application.ports.common.exceptions import ProviderError
from merge_conflict_analyzer.core.domain.analysis import AnalysisOutput
from merge_conflict_analyzer.infrastructure.common.retry.retry_policy import RetryPolicy
from merge_conflict_analyzer.infrastructure.tools.services.analysis_ingestion_client import (
    AnalysisIngestionClient,
)
from merge_conflict_analyzer.infrastructure.tools.services.config.services_settings import (
    ServicesSettings,
)
from merge_conflict_analyzer.infrastructure.tools.services.repository_registry_client import (
    RepositoryRegistryClient,
)
from merge_conflict_analyzer.infrastructure.tools.services.settings_client import SettingsClient

REPO_URL = "https://registry.test/repos"
SETTINGS_URL = "https://settings.test/settings"
ANALYSIS_URL = "https://ingest.test/analysis"
REPO_QUERY = {"owner": "acme", "repo": "shop"}
SETTINGS_QUERY = {"owner": "acme", "repo": "shop", "pull_number": "7"}
NO_RETRY = RetryPolicy(max_attempts=1)


@pytest.fixture
def settings() -> ServicesSettings:
    return ServicesSettings(
        REPO_SERVICE_URL=REPO_URL,
        SETTINGS_SERVICE_URL=SETTINGS_URL,
        ANALYSIS_SERVICE_URL=ANALYSIS_URL,
    )


@respx.mock
async def test_registered_repository(settings):
    route = respx.get(REPO_URL, params=REPO_QUERY).mock(
        return_value=httpx.Response(200, json={"id": 1})
    )

    assert await RepositoryRegistryClient(settings, retry=NO_RETRY).is_registered("acme", "shop")
    assert route.called


@respx.mock
async def test_unknown_repository(settings):
    respx.get(REPO_URL, params=REPO_QUERY).mock(return_value=httpx.Response(404))

    assert not await RepositoryRegistryClient(settings, retry=NO_RETRY).is_registered(
        "acme", "shop"
    )


@respx.mock
async def test_registry_outage_raises(settings):
    respx.get(REPO_URL, params=REPO_QUERY).mock(return_value=httpx.Response(503))

    with pytest.raises(ProviderError):
        await RepositoryRegistryClient(settings, retry=NO_RETRY).is_registered("acme", "shop")


@respx.mock
async def test_register_posts_repository(settings):
    route = respx.post(REPO_URL).mock(return_value=httpx.Response(201))

    assert await RepositoryRegistryClient(settings).register("acme", "shop")
    assert json.loads(route.calls.last.request.content) == {
        "repo": {"owner": "acme", "repo": "shop"}
    }


@respx.mock
async def test_register_rejected(settings):
    respx.post(REPO_URL).mock(return_value=httpx.Response(409))

    assert not await RepositoryRegistryClient(settings).register("acme", "shop")


@respx.mock
async def test_settings_are_parsed(settings):
    respx.get(SETTINGS_URL, params=SETTINGS_QUERY).mock(
        return_value=httpx.Response(
            200, json={"mainClass": "com.acme.App", "mainMethod": "start", "pull_number": 7}
        )
    )

    pr_settings = await SettingsClient(settings, retry=NO_RETRY).get_settings("acme", "shop", 7)

    assert pr_settings is not None
    assert pr_settings.main_class == "com.acme.App"
    assert pr_settings.main_method == "start"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404),
        httpx.Response(200, json=None),
        httpx.Response(200, json={"mainClass": "only-half"}),
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
)
async def test_absent_or_invalid_settings_are_none(settings, response, respx_mock):
    respx_mock.get(SETTINGS_URL, params=SETTINGS_QUERY).mock(return_value=response)

    assert await SettingsClient(settings, retry=NO_RETRY).get_settings("acme", "shop", 7) is None


@respx.mock
async def test_ingestion_wraps_output(settings):
    route = respx.post(ANALYSIS_URL).mock(return_value=httpx.Response(200))
    output = AnalysisOutput(uuid="u", repository="shop", owner="acme", pull_number=7, diff="d")

    await AnalysisIngestionClient(settings).send_analysis(output)

    body = json.loads(route.calls.last.request.content)
    assert body["analysis"]["uuid"] == "u"
    assert body["analysis"]["data"] == {"version": 1, "modifiedLines": [], "missingFiles": []}


@respx.mock
async def test_ingestion_accepts_plain_text_acknowledgement(settings):
    respx.post(ANALYSIS_URL).mock(return_value=httpx.Response(201, text="stored"))
    output = AnalysisOutput(uuid="u", repository="shop", owner="acme", pull_number=7, diff="d")

    await AnalysisIngestionClient(settings).send_analysis(output)


@respx.mock
async def test_settings_outage_still_raises(settings):
    respx.get(SETTINGS_URL, params=SETTINGS_QUERY).mock(return_value=httpx.Response(503))

    with pytest.raises(ProviderError):
        await SettingsClient(settings, retry=NO_RETRY).get_settings("acme", "shop", 7)


@respx.mock
async def test_ingestion_error_surfaces_to_caller(settings):
    respx.post(ANALYSIS_URL).mock(return_value=httpx.Response(400, text="bad payload"))
    output = AnalysisOutput(uuid="u", repository="shop", owner="acme", pull_number=7, diff="d")

    with pytest.raises(ProviderError, match="400"):
        await AnalysisIngestionClient(settings).send_analysis(output)
