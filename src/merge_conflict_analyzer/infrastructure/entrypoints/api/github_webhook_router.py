import time
from typing import Any

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, Header, Request, status
from fastapi.responses import JSONResponse
from structlog.contextvars import bind_contextvars, clear_contextvars, get_contextvars

from merge_conflict_analyzer.core.application.workflows.analysis.merge_analysis_workflow import (
    MergeAnalysisWorkflow,
)
from merge_conflict_analyzer.core.application.workflows.registration.repository_registration_workflow import (
    RepositoryRegistrationWorkflow,
)
from merge_conflict_analyzer.core.domain.events import InstallationEvent, PullRequestEvent
from merge_conflict_analyzer.infrastructure.config.resolution.container import (
    build_merge_analysis_workflow,
    build_registration_workflow,
)
from merge_conflict_analyzer.infrastructure.entrypoints.api.dtos.github_webhook_dto import (
    InstallationWebhookDTO,
    PullRequestWebhookDTO,
)
from merge_conflict_analyzer.infrastructure.entrypoints.api.mappers.github_payload_mapper import (
    REGISTRATION_ACTIONS,
    GitHubPayloadMapper,
)
from merge_conflict_analyzer.infrastructure.entrypoints.api.security import (
    verify_github_signature,
)
from merge_conflict_analyzer.infrastructure.observability.metrics_service import (
    ANALYSIS_RUN_DURATION_SECONDS,
    ANALYSIS_RUNS_INFLIGHT,
    ANALYSIS_RUNS_TOTAL,
    WEBHOOK_EVENTS_TOTAL,
)
from merge_conflict_analyzer.infrastructure.observability.tracing_setup import get_tracer

logger = structlog.get_logger()
router = APIRouter()

_ENDPOINT = "/webhooks/github"
_PULL_REQUEST = "pull_request"


def get_analysis_workflow() -> MergeAnalysisWorkflow:
    return build_merge_analysis_workflow()


def get_registration_workflow() -> RepositoryRegistrationWorkflow:
    return build_registration_workflow()


@router.post(
    _ENDPOINT,
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(verify_github_signature)],
    response_model=None,
)
async def receive_github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_github_event: str | None = Header(default=None),
    x_github_delivery: str | None = Header(default=None),
    analysis: MergeAnalysisWorkflow = Depends(get_analysis_workflow),
    registration: RepositoryRegistrationWorkflow = Depends(get_registration_workflow),
) -> dict[str, Any] | JSONResponse:
    event_name = x_github_event or ""
    body = await request.body()
    logger.info(
        "GitHub webhook received",
        github_event=event_name,
        delivery_id=x_github_delivery,
        context_endpoint=_ENDPOINT,
    )
    try:
        if event_name == _PULL_REQUEST:
            pr_event = GitHubPayloadMapper.to_pull_request_event(
                PullRequestWebhookDTO.model_validate_json(body), x_github_delivery
            )
            background_tasks.add_task(_run_analysis, analysis, pr_event, get_contextvars())
            _count(event_name, "accepted")
            return {
                "status": "accepted",
                "message": "Merge analysis queued.",
                "repository": pr_event.repository.full_name,
                "pull_number": pr_event.pull_number,
            }
        if event_name in REGISTRATION_ACTIONS:
            install_event = GitHubPayloadMapper.to_installation_event(
                event_name, InstallationWebhookDTO.model_validate_json(body), x_github_delivery
            )
            background_tasks.add_task(
                _run_registration, registration, install_event, get_contextvars()
            )
            _count(event_name, "accepted")
            return {
                "status": "accepted",
                "message": "Repository registration queued.",
                "repositories": [ref.full_name for ref in install_event.repositories],
            }
    except ValueError as exc:
        # pydantic's ValidationError is a ValueError too
        _count(event_name, "ignored")
        logger.info("Webhook ignored", github_event=event_name, reason=str(exc))
        return _ignored(str(exc))

    _count(event_name, "ignored")
    return _ignored(f"Event '{event_name}' is not handled")


async def _run_analysis(
    workflow: MergeAnalysisWorkflow, event: PullRequestEvent, ctx_snapshot: dict[str, Any]
) -> None:
    """Wrap the analysis run with Prometheus metrics tracking and context propagation."""
    _restore_context(ctx_snapshot)
    ANALYSIS_RUNS_INFLIGHT.inc()
    start = time.perf_counter()
    outcome = "failure"
    try:
        with get_tracer().start_as_current_span("workflow.merge_analysis"):
            output = await workflow.execute(event)
        outcome = "completed" if output is not None else "skipped"
    finally:
        _record_run_outcome(start, outcome)


async def _run_registration(
    workflow: RepositoryRegistrationWorkflow,
    event: InstallationEvent,
    ctx_snapshot: dict[str, Any],
) -> None:
    _restore_context(ctx_snapshot)
    with get_tracer().start_as_current_span("workflow.repository_registration"):
        await workflow.execute(event)


def _restore_context(ctx_snapshot: dict[str, Any]) -> None:
    """Re-bind structlog contextvars from a snapshot captured in the request scope."""
    clear_contextvars()
    bind_contextvars(**ctx_snapshot)


def _record_run_outcome(start: float, outcome: str) -> None:
    ANALYSIS_RUNS_INFLIGHT.dec()
    ANALYSIS_RUN_DURATION_SECONDS.observe(time.perf_counter() - start)
    ANALYSIS_RUNS_TOTAL.labels(outcome=outcome).inc()


def _count(event_name: str, outcome: str) -> None:
    handled = event_name == _PULL_REQUEST or event_name in REGISTRATION_ACTIONS
    known = event_name if handled else "other"
    WEBHOOK_EVENTS_TOTAL.labels(event=known, outcome=outcome).inc()


def _ignored(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "ignored", "reason": reason},
    )
