from unittest.mock import MagicMock

from merge_conflict_analyzer.core.application.ports import RepositoryRegistryPort
from merge_conflict_analyzer.core.application.ports.common.exceptions import ProviderError
from merge_conflict_analyzer.core.application.workflows.registration.repository_registration_workflow import (
    RepositoryRegistrationWorkflow,
)
from merge_conflict_analyzer.core.domain.events import InstallationEvent, RepositoryRef

SHOP = RepositoryRef(owner="acme", repo="shop")
BILLING = RepositoryRef(owner="acme", repo="billing")
LEGACY = RepositoryRef(owner="acme", repo="legacy")


async def test_registers_only_unknown_repositories():
    registry = MagicMock(spec=RepositoryRegistryPort)
    registry.is_registered.side_effect = lambda owner, repo: repo == "shop"
    registry.register.return_value = True

    registered = await RepositoryRegistrationWorkflow(registry).execute(
        InstallationEvent(action="created", repositories=[SHOP, BILLING])
    )

    assert registered == [BILLING]
    registry.register.assert_awaited_once_with("acme", "billing")


async def test_one_failure_does_not_stop_the_others():
    registry = MagicMock(spec=RepositoryRegistryPort)
    registry.is_registered.side_effect = [
        ProviderError(provider="RepositoryService", message="timeout", retryable=True),
        False,
        False,
    ]
    registry.register.side_effect = [True, False]

    registered = await RepositoryRegistrationWorkflow(registry).execute(
        InstallationEvent(action="added", repositories=[SHOP, BILLING, LEGACY])
    )

    assert registered == [BILLING]
    assert registry.register.await_count == 2
