from merge_conflict_analyzer.core.domain.events.pull_request_event import (
    InstallationEvent,
    PullRequestAction,
    PullRequestEvent,
    RepositoryRef,
)

__all__ = ["InstallationEvent", "PullRequestAction", "PullRequestEvent", "RepositoryRef"]
