from abc import ABC, abstractmethod

from merge_conflict_analyzer.core.domain.merge import PullRequestState
from merge_conflict_analyzer.core.domain.review import ReviewComment


class VcsPort(ABC):

    @abstractmethod
    async def get_pull_request(self, owner: str, repo: str, pull_number: int) -> PullRequestState:
        """Returns the PR's mergeability flag and merge commit SHA."""
        pass

    @abstractmethod
    async def get_commit_parents(self, owner: str, repo: str, sha: str) -> list[str]:
        """Returns the parent SHAs of a commit, in platform order."""
        pass

    @abstractmethod
    async def create_review(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        body: str,
        comments: list[ReviewComment] | None = None,
        event: str = "COMMENT",
    ) -> None:
        """Posts a review with a summary body and optional inline comments."""
        pass

    @abstractmethod
    def clone_url(self, owner: str, repo: str) -> str:
        """Returns an authenticated clone URL for the repository."""
        pass
