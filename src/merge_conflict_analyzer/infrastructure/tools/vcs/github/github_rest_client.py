from typing import Any

import structlog

from merge_conflict_analyzer.core.application.ports import VcsPort
from merge_conflict_analyzer.core.application.ports.common.exceptions import ProviderError
from merge_conflict_analyzer.core.domain.merge import PullRequestState
from merge_conflict_analyzer.core.domain.review import ReviewComment
from merge_conflict_analyzer.infrastructure.common.retry.retry_policy import RetryPolicy
from merge_conflict_analyzer.infrastructure.observability.tracing_setup import trace_operation
from merge_conflict_analyzer.infrastructure.tools.common.base_http_client import BaseHttpClient
from merge_conflict_analyzer.infrastructure.tools.vcs.github.config.github_settings import (
    GitHubSettings,
)

logger = structlog.get_logger()


class GitHubRestClient(BaseHttpClient, VcsPort):
    """VcsPort over the GitHub REST API (pulls, commits, reviews)."""

    provider = "GitHub"

    def __init__(self, settings: GitHubSettings, retry: RetryPolicy | None = None) -> None:
        super().__init__(timeout=settings.timeout_seconds, retry=retry)
        self._settings = settings
        self._api_url = settings.api_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._settings.token:
            headers["Authorization"] = f"Bearer {self._settings.token.get_secret_value()}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self._api_url}/{path.lstrip('/')}"

    @trace_operation("github.get_pull_request")
    async def get_pull_request(self, owner: str, repo: str, pull_number: int) -> PullRequestState:
        url = self._url(f"repos/{owner}/{repo}/pulls/{pull_number}")
        data = self._require_success("GET", url, await self._get(url))
        logger.info(
            "Pull request fetched",
            mergeable=data.get("mergeable"),
            merge_commit_sha=data.get("merge_commit_sha"),
        )
        return PullRequestState(
            number=int(data.get("number", pull_number)),
            mergeable=data.get("mergeable"),
            merge_commit_sha=data.get("merge_commit_sha"),
            state=data.get("state", "open"),
        )

    @trace_operation("github.get_commit")
    async def get_commit_parents(self, owner: str, repo: str, sha: str) -> list[str]:
        url = self._url(f"repos/{owner}/{repo}/commits/{sha}")
        data = self._require_success("GET", url, await self._get(url))
        try:
            return [parent["sha"] for parent in data.get("parents", [])]
        except (KeyError, TypeError) as exc:
            raise ProviderError(
                provider=self.provider, message=f"Malformed commit payload for {sha}"
            ) from exc

    @trace_operation("github.create_review")
    async def create_review(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        body: str,
        comments: list[ReviewComment] | None = None,
        event: str = "COMMENT",
    ) -> None:
        url = self._url(f"repos/{owner}/{repo}/pulls/{pull_number}/reviews")
        payload: dict[str, Any] = {"body": body, "event": event}
        if comments:
            payload["comments"] = [
                {"path": c.path, "line": c.line, "side": "RIGHT", "body": c.body} for c in comments
            ]
        self._ensure_success("POST", url, await self._post(url, payload))

    def clone_url(self, owner: str, repo: str) -> str:
        base = self._settings.clone_base_url.rstrip("/")
        if self._settings.token and "://" in base:
            scheme, host = base.split("://", 1)
            token = self._settings.token.get_secret_value()
            base = f"{scheme}://x-access-token:{token}@{host}"
        return f"{base}/{owner}/{repo}.git"
