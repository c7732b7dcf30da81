import structlog

from merge_conflict_analyzer.core.application.exceptions import (
    WorkflowExecutionError,
    WorkflowHaltedException,
)
from merge_conflict_analyzer.core.application.policies.bounded_retry import BoundedRetry
from merge_conflict_analyzer.core.application.ports import VcsPort
from merge_conflict_analyzer.core.application.ports.common.exceptions import is_transient
from merge_conflict_analyzer.core.application.skills.analysis.contracts.analysis_contracts import (
    ResolveMergeStateInput,
)
from merge_conflict_analyzer.core.application.skills.skill import BaseSkill
from merge_conflict_analyzer.core.domain.merge import MergeParents, PullRequestState

logger = structlog.get_logger()


class ResolveMergeStateSkill(BaseSkill[ResolveMergeStateInput, MergeParents]):
    """Waits for the platform to compute the PR's merge commit and returns its two parents."""

    def __init__(self, vcs: VcsPort, retry: BoundedRetry | None = None) -> None:
        self._vcs = vcs
        self._retry = retry or BoundedRetry(retry_on=is_transient)

    async def execute(self, input_data: ResolveMergeStateInput) -> MergeParents:
        pr = await self._await_mergeable(input_data)
        parents = await self._vcs.get_commit_parents(
            input_data.owner, input_data.repo, pr.merge_commit_sha or ""
        )
        if len(parents) != 2:
            raise WorkflowExecutionError(
                f"Merge commit {pr.merge_commit_sha} has {len(parents)} parent(s); expected 2.",
                context={"merge_commit_sha": pr.merge_commit_sha, "step": "resolve_merge_state"},
            )
        # Platform order decides which branch is labelled L and which R downstream.
        merge_parents = MergeParents(left_sha=parents[0], right_sha=parents[1])
        logger.info(
            "Merge parents resolved",
            merge_commit_sha=pr.merge_commit_sha,
            left_sha=merge_parents.left_sha,
            right_sha=merge_parents.right_sha,
        )
        return merge_parents

    async def _await_mergeable(self, input_data: ResolveMergeStateInput) -> PullRequestState:
        async def fetch() -> PullRequestState:
            return await self._vcs.get_pull_request(
                input_data.owner, input_data.repo, input_data.pull_number
            )

        pr = await self._retry.poll(fetch, until=lambda state: state.is_ready)
        if pr is None:
            raise WorkflowHaltedException(
                f"Pull request #{input_data.pull_number} is not mergeable",
                context={"pull_number": input_data.pull_number, "step": "resolve_merge_state"},
            )
        return pr
