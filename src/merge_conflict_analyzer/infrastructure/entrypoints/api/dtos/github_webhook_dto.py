from pydantic import BaseModel, Field


class GitHubAccountDTO(BaseModel):
    login: str


class GitHubRepositoryDTO(BaseModel):
    name: str
    full_name: str | None = None
    owner: GitHubAccountDTO | None = None


class GitHubPullRequestDTO(BaseModel):
    number: int
    state: str | None = None
    merged: bool | None = None


class GitHubInstallationDTO(BaseModel):
    id: int | None = None
    account: GitHubAccountDTO | None = None


class PullRequestWebhookDTO(BaseModel):
    action: str
    number: int | None = None
    pull_request: GitHubPullRequestDTO
    repository: GitHubRepositoryDTO
    installation: GitHubInstallationDTO | None = None


class InstallationWebhookDTO(BaseModel):
    """Covers both ``installation`` and ``installation_repositories`` deliveries."""

    action: str
    installation: GitHubInstallationDTO | None = None
    repositories: list[GitHubRepositoryDTO] = Field(default_factory=list)
    repositories_added: list[GitHubRepositoryDTO] = Field(default_factory=list)
