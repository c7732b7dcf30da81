"""Deterministic merge analysis pipeline for one pull-request event."""

import asyncio
from collections.abc import Callable
from pathlib import Path
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars

from merge_conflict_analyzer.core.application.exceptions import (
    AnalysisOutputError,
    WorkflowExecutionError,
    WorkflowHaltedException,
)
from merge_conflict_analyzer.core.application.ports import (
    CommandResult,
    ReportArchivePort,
    RepositoryRegistryPort,
    SettingsPort,
)
from merge_conflict_analyzer.core.application.ports.common.exceptions import ProviderError
from merge_conflict_analyzer.core.application.skills.analysis.contracts.analysis_contracts import (
    DeliverAnalysisInput,
    EnrichAnalysisInput,
    EnrichedAnalysis,
    InvokeAnalysisInput,
    ReproduceMergeInput,
    ResolveMergeStateInput,
)
from merge_conflict_analyzer.core.application.skills.skill import BaseSkill
from merge_conflict_analyzer.core.application.workflows.analysis.run_workspace import (
    run_workspace,
)
from merge_conflict_analyzer.core.application.workflows.base_workflow import BaseWorkflow
from merge_conflict_analyzer.core.domain.analysis import AnalysisOutput
from merge_conflict_analyzer.core.domain.events import PullRequestEvent
from merge_conflict_analyzer.core.domain.merge import (
    MergeContext,
    MergeParents,
    PrSettings,
    ReproducedMerge,
)

logger = structlog.get_logger()


class MergeAnalysisWorkflow(BaseWorkflow[PullRequestEvent]):
    """Registered? -> Resolve -> Settings -> Reproduce -> Invoke -> Enrich -> Deliver.

    Every stage depends on the previous one, so the run is strictly
    sequential. The clone lives in a per-run directory removed on every exit
    path.
    """

    def __init__(
        self,
        registry: RepositoryRegistryPort,
        settings: SettingsPort,
        resolve: BaseSkill[ResolveMergeStateInput, MergeParents],
        reproduce: BaseSkill[ReproduceMergeInput, ReproducedMerge],
        invoke: BaseSkill[InvokeAnalysisInput, CommandResult | None],
        enrich: BaseSkill[EnrichAnalysisInput, EnrichedAnalysis],
        deliver: BaseSkill[DeliverAnalysisInput, None],
        workspace_root: Path,
        archive: ReportArchivePort | None = None,
        run_id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings
        self._resolve = resolve
        self._reproduce = reproduce
        self._invoke = invoke
        self._enrich = enrich
        self._deliver = deliver
        self._workspace_root = workspace_root
        self._archive = archive
        self._run_id_factory = run_id_factory or (lambda: str(uuid4()))

    async def execute(self, event: PullRequestEvent) -> AnalysisOutput | None:
        """Run the pipeline; returns the delivered output, or None when the run was skipped."""
        run_id = self._run_id_factory()
        bind_contextvars(
            run_id=run_id,
            owner=event.owner,
            repo=event.repo,
            pull_number=event.pull_number,
            event_type="workflow.merge_analysis",
        )
        logger.info("Merge analysis started", action=event.action.value)
        try:
            output = await self._run_pipeline(event, run_id)
        except WorkflowHaltedException as halt:
            logger.info("Merge analysis halted", reason=str(halt), **halt.context)
            return None
        except WorkflowExecutionError as wfe:
            self._log_failure(wfe)
            raise
        except Exception as exc:
            self._log_failure(exc)
            raise WorkflowExecutionError(
                str(exc), context={"run_id": run_id, "pull_number": event.pull_number}
            ) from exc
        logger.info("Merge analysis completed", events=len(output.events) if output else 0)
        return output

    async def _run_pipeline(self, event: PullRequestEvent, run_id: str) -> AnalysisOutput | None:
        await self._step_1_check_registration(event)
        parents = await self._step_2_resolve_merge_state(event)
        pr_settings = await self._step_3_fetch_settings(event)
        async with run_workspace(self._workspace_root, event.repo, run_id) as workdir:
            merge = await self._step_4_reproduce(event, parents, workdir)
            context = MergeContext.from_parts(
                event.owner, event.repo, event.pull_number, parents, merge
            )
            checkout = Path(merge.checkout_dir)
            tool_result = await self._step_5_invoke(context, checkout, pr_settings)
            enriched, failure = await self._step_6_enrich(checkout, merge.diff_text)
            await self._archive_reports(event.repo, checkout, tool_result)
            output = self._build_output(run_id, context, merge, enriched)
            await self._step_7_deliver(context, output, merge.diff_text)
        if failure is not None:
            raise WorkflowExecutionError(str(failure), context=failure.context) from failure
        return output

    # ── Step Methods ─────────────────────────────────────────────────

    async def _step_1_check_registration(self, event: PullRequestEvent) -> None:
        if not await self._registry.is_registered(event.owner, event.repo):
            raise WorkflowHaltedException(
                f"Repository {event.repository.full_name} is not registered",
                context={"step": "check_registration"},
            )

    async def _step_2_resolve_merge_state(self, event: PullRequestEvent) -> MergeParents:
        logger.info("Step 2: Resolving merge state")
        return await self._resolve.execute(
            ResolveMergeStateInput(event.owner, event.repo, event.pull_number)
        )

    async def _step_3_fetch_settings(self, event: PullRequestEvent) -> PrSettings | None:
        try:
            settings = await self._settings.get_settings(
                event.owner, event.repo, event.pull_number
            )
        except ProviderError as exc:
            logger.warning(
                "Settings service unavailable, using default entry point",
                error_type="ProviderError",
                error_details=exc.message,
            )
            return None
        logger.info("Step 3: PR settings fetched", has_settings=settings is not None)
        return settings

    async def _step_4_reproduce(
        self, event: PullRequestEvent, parents: MergeParents, workdir: Path
    ) -> ReproducedMerge:
        logger.info("Step 4: Reproducing merge", workdir=str(workdir))
        return await self._reproduce.execute(
            ReproduceMergeInput(
                owner=event.owner,
                repo=event.repo,
                pull_number=event.pull_number,
                parents=parents,
                workdir=workdir,
            )
        )

    async def _step_5_invoke(
        self, context: MergeContext, checkout: Path, pr_settings: PrSettings | None
    ) -> CommandResult | None:
        logger.info("Step 5: Running analysis tool")
        return await self._invoke.execute(
            InvokeAnalysisInput(context=context, checkout_dir=checkout, pr_settings=pr_settings)
        )

    async def _step_6_enrich(
        self, checkout: Path, diff_text: str
    ) -> tuple[EnrichedAnalysis | None, AnalysisOutputError | None]:
        logger.info("Step 6: Enriching analysis results")
        try:
            enriched = await self._enrich.execute(
                EnrichAnalysisInput(checkout_dir=checkout, diff_text=diff_text)
            )
        except AnalysisOutputError as exc:
            logger.error(
                "Analysis tool produced no usable output",
                processing_status="ERROR",
                error_type="AnalysisOutputError",
                error_details=str(exc),
            )
            return None, exc
        return enriched, None

    async def _step_7_deliver(
        self, context: MergeContext, output: AnalysisOutput | None, diff_text: str
    ) -> None:
        logger.info("Step 7: Delivering results", has_output=output is not None)
        await self._deliver.execute(
            DeliverAnalysisInput(context=context, output=output, diff_text=diff_text)
        )

    # ── Private Helpers ──────────────────────────────────────────────

    @staticmethod
    def _build_output(
        run_id: str,
        context: MergeContext,
        merge: ReproducedMerge,
        enriched: EnrichedAnalysis | None,
    ) -> AnalysisOutput | None:
        if enriched is None:
            return None
        return AnalysisOutput(
            uuid=run_id,
            repository=context.repo,
            owner=context.owner,
            pull_number=context.pull_number,
            diff=merge.diff_text,
            events=enriched.events,
            data=enriched.data,
        )

    async def _archive_reports(
        self, repo: str, checkout: Path, tool_result: CommandResult | None
    ) -> None:
        if self._archive is None:
            return
        try:
            await asyncio.to_thread(
                self._archive.archive,
                repo,
                checkout,
                tool_result.stdout if tool_result else None,
            )
        except OSError as exc:
            logger.warning("Failed to archive analysis reports", error_details=str(exc))

    @staticmethod
    def _log_failure(error: Exception) -> None:
        logger.error(
            "Merge analysis failed",
            processing_status="ERROR",
            error_type=type(error).__name__,
            error_details=str(error),
            error_retryable=False,
        )
