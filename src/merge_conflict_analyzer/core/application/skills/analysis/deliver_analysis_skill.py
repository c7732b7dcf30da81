import structlog

from merge_conflict_analyzer.core.application.ports import AnalysisIngestionPort, VcsPort
from merge_conflict_analyzer.core.application.ports.common.exceptions import ProviderError
from merge_conflict_analyzer.core.application.skills.analysis.contracts.analysis_contracts import (
    DeliverAnalysisInput,
)
from merge_conflict_analyzer.core.application.skills.analysis.formatters.review_summary_formatter import (
    build_fallback_section,
    build_inline_comments,
    build_review_summary,
)
from merge_conflict_analyzer.core.application.skills.skill import BaseSkill
from merge_conflict_analyzer.core.domain.analysis import AnalysisOutput
from merge_conflict_analyzer.core.domain.analysis.services import files_in_diff
from merge_conflict_analyzer.core.domain.merge import MergeContext
from merge_conflict_analyzer.core.domain.review import ReviewComment

logger = structlog.get_logger()


class DeliverAnalysisSkill(BaseSkill[DeliverAnalysisInput, None]):
    """Posts the PR summary review, then hands the analysis to the ingestion service.

    Neither step raises: the review is attempted even without analysis
    output, and ingestion is fire-and-forget.
    """

    def __init__(
        self,
        vcs: VcsPort,
        ingestion: AnalysisIngestionPort,
        inline_comments_enabled: bool = False,
    ) -> None:
        self._vcs = vcs
        self._ingestion = ingestion
        self._inline_comments_enabled = inline_comments_enabled

    async def execute(self, input_data: DeliverAnalysisInput) -> None:
        await self._publish_review(input_data)
        if input_data.output is not None:
            await self._send_to_ingestion(input_data.output)

    async def _publish_review(self, input_data: DeliverAnalysisInput) -> None:
        ctx = input_data.context
        body = build_review_summary(ctx, input_data.output)
        comments: list[ReviewComment] = []
        if self._inline_comments_enabled and input_data.output is not None:
            comments = build_inline_comments(
                input_data.output.events, files_in_diff(input_data.diff_text)
            )
        try:
            await self._create_review(ctx, body, comments)
        except ProviderError as exc:
            if not comments:
                self._log_review_failure(ctx, exc)
                return
            logger.warning(
                "Inline review comments rejected, retrying without them",
                error_type="ProviderError",
                error_details=exc.message,
            )
            try:
                await self._create_review(ctx, body + build_fallback_section(comments), [])
            except ProviderError as retry_exc:
                self._log_review_failure(ctx, retry_exc)

    async def _create_review(
        self, ctx: MergeContext, body: str, comments: list[ReviewComment]
    ) -> None:
        await self._vcs.create_review(
            ctx.owner, ctx.repo, ctx.pull_number, body, comments=comments, event="COMMENT"
        )
        logger.info("Summary review posted", inline_comments=len(comments))

    async def _send_to_ingestion(self, output: AnalysisOutput) -> None:
        try:
            await self._ingestion.send_analysis(output)
            logger.info("Analysis delivered", analysis_uuid=output.uuid, events=len(output.events))
        except Exception as e:
            logger.warning(
                "Analysis delivery failed (not retried)",
                analysis_uuid=output.uuid,
                error_type=type(e).__name__,
                error_details=str(e),
            )

    @staticmethod
    def _log_review_failure(ctx: MergeContext, exc: ProviderError) -> None:
        logger.error(
            "Failed to post summary review",
            pull_number=ctx.pull_number,
            processing_status="ERROR",
            error_type="ProviderError",
            error_details=exc.message,
            error_retryable=exc.retryable,
        )
