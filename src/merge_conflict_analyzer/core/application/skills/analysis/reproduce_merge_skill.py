"""Reproduces a pull request's three-way merge in a local clone."""

from pathlib import Path

import structlog

from merge_conflict_analyzer.core.application.exceptions import (
    WorkflowExecutionError,
    WorkflowHaltedException,
)
from merge_conflict_analyzer.core.application.ports import CommandRunnerPort, VcsPort
from merge_conflict_analyzer.core.application.ports.common.exceptions import (
    CommandExecutionError,
)
from merge_conflict_analyzer.core.application.skills.analysis.config.analysis_tool_config import (
    ReproductionConfig,
)
from merge_conflict_analyzer.core.application.skills.analysis.contracts.analysis_contracts import (
    ReproduceMergeInput,
)
from merge_conflict_analyzer.core.application.skills.skill import BaseSkill
from merge_conflict_analyzer.core.domain.merge import ReproducedMerge

logger = structlog.get_logger()


class ReproduceMergeSkill(BaseSkill[ReproduceMergeInput, ReproducedMerge]):
    """Clone -> merge-base -> checkout left -> merge right -> diff base..merge.

    The platform's merge commit is never reused: it may be missing from the
    fetched history or produced by a non-merge strategy. A local merge gives
    a deterministic commit every later step can inspect.
    """

    def __init__(
        self, runner: CommandRunnerPort, vcs: VcsPort, config: ReproductionConfig | None = None
    ) -> None:
        self._runner = runner
        self._vcs = vcs
        self._config = config or ReproductionConfig()

    async def execute(self, input_data: ReproduceMergeInput) -> ReproducedMerge:
        checkout = input_data.workdir / input_data.repo
        left, right = input_data.parents.left_sha, input_data.parents.right_sha

        await self._clone(input_data, checkout)
        await self._ensure_commits_present(checkout, input_data.pull_number, left, right)
        merge_base = await self._git(checkout, "merge-base", left, right, step="merge_base")
        if merge_base in (left, right):
            raise WorkflowHaltedException(
                "Merge base equals branch; fast-forward merges have no conflicts to analyze",
                context={"merge_base_sha": merge_base, "step": "reproduce_merge"},
            )

        await self._git(checkout, "checkout", "--quiet", "--detach", left, step="checkout_left")
        await self._git(
            checkout,
            "-c",
            f"user.name={self._config.committer_name}",
            "-c",
            f"user.email={self._config.committer_email}",
            "merge",
            "--no-ff",
            "--no-edit",
            "--quiet",
            right,
            step="merge_right",
        )
        merge_sha = await self._git(checkout, "rev-parse", "HEAD", step="rev_parse")
        diff_text = await self._git(
            checkout,
            "diff",
            f"--unified={self._config.diff_context_lines}",
            merge_base,
            merge_sha,
            step="diff",
            strip=False,
        )
        logger.info(
            "Merge reproduced locally",
            merge_base_sha=merge_base,
            merge_sha=merge_sha,
            diff_length=len(diff_text),
        )
        return ReproducedMerge(
            merge_base_sha=merge_base,
            merge_sha=merge_sha,
            diff_text=diff_text,
            checkout_dir=str(checkout),
        )

    async def _clone(self, input_data: ReproduceMergeInput, checkout: Path) -> None:
        url = self._vcs.clone_url(input_data.owner, input_data.repo)
        logger.info("Cloning repository", repo=input_data.repo, workdir=str(input_data.workdir))
        try:
            await self._runner.run_checked(
                ["git", "clone", "--quiet", url, str(checkout)],
                cwd=input_data.workdir,
                timeout=self._config.clone_timeout_seconds,
            )
        except CommandExecutionError as exc:
            raise WorkflowExecutionError(
                f"git clone failed: {exc.stderr.strip()}", context={"step": "clone"}
            ) from exc

    async def _ensure_commits_present(
        self, checkout: Path, pull_number: int, *shas: str
    ) -> None:
        """Fetch the PR head ref when a parent (e.g. from a fork) is not in the clone."""
        for sha in shas:
            rev_check = await self._runner.run(
                ["git", "cat-file", "-e", f"{sha}^{{commit}}"],
                cwd=checkout,
                timeout=self._config.git_timeout_seconds,
            )
            if not rev_check.succeeded:
                logger.info("Parent missing from clone, fetching PR head", sha=sha)
                await self._git(
                    checkout, "fetch", "--quiet", "origin", f"pull/{pull_number}/head", step="fetch"
                )
                return

    async def _git(self, checkout: Path, *args: str, step: str, strip: bool = True) -> str:
        try:
            result = await self._runner.run_checked(
                ["git", *args], cwd=checkout, timeout=self._config.git_timeout_seconds
            )
        except CommandExecutionError as exc:
            raise WorkflowExecutionError(
                f"git {step} failed: {exc.stderr.strip()}",
                context={"step": step, "returncode": exc.returncode},
            ) from exc
        return result.stdout.strip() if strip else result.stdout
