import structlog
from structlog.contextvars import bind_contextvars

from merge_conflict_analyzer.core.application.ports import RepositoryRegistryPort
from merge_conflict_analyzer.core.application.ports.common.exceptions import ProviderError
from merge_conflict_analyzer.core.application.workflows.base_workflow import BaseWorkflow
from merge_conflict_analyzer.core.domain.events import InstallationEvent, RepositoryRef

logger = structlog.get_logger()


class RepositoryRegistrationWorkflow(BaseWorkflow[InstallationEvent]):
    """Enrolls every repository of an installation event that is not registered yet."""

    def __init__(self, registry: RepositoryRegistryPort) -> None:
        self._registry = registry

    async def execute(self, event: InstallationEvent) -> list[RepositoryRef]:
        bind_contextvars(event_type="workflow.repository_registration")
        registered: list[RepositoryRef] = []
        for ref in event.repositories:
            try:
                if await self._register_if_needed(ref):
                    registered.append(ref)
            except ProviderError as exc:
                logger.warning(
                    "Repository registration failed",
                    repository=ref.full_name,
                    error_type="ProviderError",
                    error_details=exc.message,
                )
        logger.info(
            "Repository registration finished",
            requested=len(event.repositories),
            registered=len(registered),
        )
        return registered

    async def _register_if_needed(self, ref: RepositoryRef) -> bool:
        if await self._registry.is_registered(ref.owner, ref.repo):
            logger.info("Repository already registered", repository=ref.full_name)
            return False
        ok = await self._registry.register(ref.owner, ref.repo)
        if not ok:
            logger.warning("Registration service refused repository", repository=ref.full_name)
        return ok
