from dataclasses import dataclass, field
from enum import StrEnum


class PullRequestAction(StrEnum):
    OPENED = "opened"
    REOPENED = "reopened"
    SYNCHRONIZE = "synchronize"


@dataclass(frozen=True)
class RepositoryRef:
    owner: str
    repo: str

    def __post_init__(self) -> None:
        if not self.owner.strip() or not self.repo.strip():
            raise ValueError("Repository owner and name cannot be empty.")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class PullRequestEvent:
    """A pull-request lifecycle event that should trigger one analysis run."""

    repository: RepositoryRef
    pull_number: int
    action: PullRequestAction
    delivery_id: str | None = None

    @property
    def owner(self) -> str:
        return self.repository.owner

    @property
    def repo(self) -> str:
        return self.repository.repo


@dataclass(frozen=True)
class InstallationEvent:
    """Installation or repository-added event carrying repositories to register."""

    action: str
    repositories: list[RepositoryRef] = field(default_factory=list)
    delivery_id: str | None = None
