from merge_conflict_analyzer.core.domain.events import (
    InstallationEvent,
    PullRequestAction,
    PullRequestEvent,
    RepositoryRef,
)
from merge_conflict_analyzer.infrastructure.entrypoints.api.dtos.github_webhook_dto import (
    GitHubRepositoryDTO,
    InstallationWebhookDTO,
    PullRequestWebhookDTO,
)

# Deliveries that enroll repositories: a new installation, or repositories added to one.
REGISTRATION_ACTIONS: dict[str, frozenset[str]] = {
    "installation": frozenset({"created"}),
    "installation_repositories": frozenset({"added"}),
}


class GitHubPayloadMapper:
    @staticmethod
    def to_pull_request_event(
        dto: PullRequestWebhookDTO, delivery_id: str | None = None
    ) -> PullRequestEvent:
        """Raises ValueError for actions that do not trigger an analysis."""
        try:
            action = PullRequestAction(dto.action)
        except ValueError:
            raise ValueError(
                f"Pull request action '{dto.action}' does not trigger analysis"
            ) from None
        return PullRequestEvent(
            repository=GitHubPayloadMapper._to_ref(dto.repository, None),
            pull_number=dto.number or dto.pull_request.number,
            action=action,
            delivery_id=delivery_id,
        )

    @staticmethod
    def to_installation_event(
        event_name: str, dto: InstallationWebhookDTO, delivery_id: str | None = None
    ) -> InstallationEvent:
        if dto.action not in REGISTRATION_ACTIONS.get(event_name, frozenset()):
            raise ValueError(f"{event_name}.{dto.action} does not register repositories")
        installation = dto.installation
        account = installation.account.login if installation and installation.account else None
        repositories = (
            dto.repositories_added
            if event_name == "installation_repositories"
            else dto.repositories
        )
        return InstallationEvent(
            action=dto.action,
            repositories=[GitHubPayloadMapper._to_ref(r, account) for r in repositories],
            delivery_id=delivery_id,
        )

    @staticmethod
    def _to_ref(repository: GitHubRepositoryDTO, fallback_owner: str | None) -> RepositoryRef:
        if repository.full_name and "/" in repository.full_name:
            owner, name = repository.full_name.split("/", 1)
            return RepositoryRef(owner=owner, repo=name)
        owner = repository.owner.login if repository.owner else fallback_owner
        if not owner:
            raise ValueError(f"Cannot determine owner of repository '{repository.name}'")
        return RepositoryRef(owner=owner, repo=repository.name)
