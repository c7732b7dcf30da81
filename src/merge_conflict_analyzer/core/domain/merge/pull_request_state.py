from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequestState:
    """Mergeability snapshot of a pull request as reported by the platform."""

    number: int
    mergeable: bool | None
    merge_commit_sha: str | None
    state: str = "open"

    @property
    def is_ready(self) -> bool:
        return self.mergeable is True and bool(self.merge_commit_sha)
