"""Unit tests: DeliverAnalysisSkill (review publishing + fire-and-forget ingestion)."""

from unittest.mock import MagicMock

import pytest

from merge_conflict_analyzer.core.application.ports import AnalysisIngestionPort, VcsPort
from merge_conflict_analyzer.core.application.ports.common.exceptions import ProviderError
from merge_conflict_analyzer.core.application.skills.analysis.contracts.analysis_contracts import (
    DeliverAnalysisInput,
)
from merge_conflict_analyzer.core.application.skills.analysis.deliver_analysis_skill import (
    DeliverAnalysisSkill,
)
from merge_conflict_analyzer.core.domain.analysis import AnalysisOutput

DIFF = "diff --git a/src/Cart.java b/src/Cart.java\n"


@pytest.fixture
def vcs() -> MagicMock:
    return MagicMock(spec=VcsPort)


@pytest.fixture
def ingestion() -> MagicMock:
    return MagicMock(spec=AnalysisIngestionPort)


@pytest.fixture
def output(make_event) -> AnalysisOutput:
    return AnalysisOutput(
        uuid="run-1",
        repository="shop",
        owner="acme",
        pull_number=7,
        diff=DIFF,
        events=[make_event(("src/Cart.java", 12), ("src/Other.java", 3))],
    )


async def test_posts_review_then_sends_analysis(vcs, ingestion, merge_context, output):
    skill = DeliverAnalysisSkill(vcs=vcs, ingestion=ingestion)

    await skill.execute(DeliverAnalysisInput(context=merge_context, output=output, diff_text=DIFF))

    vcs.create_review.assert_awaited_once()
    args, kwargs = vcs.create_review.await_args
    assert args[:3] == ("acme", "shop", 7)
    assert "Interferences found:** 1" in args[3]
    assert kwargs == {"comments": [], "event": "COMMENT"}
    ingestion.send_analysis.assert_awaited_once_with(output)


async def test_review_without_output_skips_ingestion(vcs, ingestion, merge_context):
    skill = DeliverAnalysisSkill(vcs=vcs, ingestion=ingestion)

    await skill.execute(DeliverAnalysisInput(context=merge_context, output=None))

    body = vcs.create_review.await_args.args[3]
    assert "no usable output" in body
    ingestion.send_analysis.assert_not_awaited()


async def test_ingestion_failure_is_swallowed(vcs, ingestion, merge_context, output):
    ingestion.send_analysis.side_effect = ProviderError(
        provider="AnalysisService", message="down", retryable=True
    )
    skill = DeliverAnalysisSkill(vcs=vcs, ingestion=ingestion)

    await skill.execute(DeliverAnalysisInput(context=merge_context, output=output))

    ingestion.send_analysis.assert_awaited_once()


async def test_review_failure_does_not_block_ingestion(vcs, ingestion, merge_context, output):
    vcs.create_review.side_effect = ProviderError(provider="GitHub", message="403")
    skill = DeliverAnalysisSkill(vcs=vcs, ingestion=ingestion)

    await skill.execute(DeliverAnalysisInput(context=merge_context, output=output))

    ingestion.send_analysis.assert_awaited_once_with(output)


async def test_inline_comments_anchor_on_diff_files(vcs, ingestion, merge_context, output):
    skill = DeliverAnalysisSkill(vcs=vcs, ingestion=ingestion, inline_comments_enabled=True)

    await skill.execute(DeliverAnalysisInput(context=merge_context, output=output, diff_text=DIFF))

    [comment] = vcs.create_review.await_args.kwargs["comments"]
    assert (comment.path, comment.line) == ("src/Cart.java", 12)


async def test_rejected_inline_comments_fall_back_to_body(vcs, ingestion, merge_context, output):
    vcs.create_review.side_effect = [
        ProviderError(provider="GitHub", message="line must be part of the diff", status_code=422),
        None,
    ]
    skill = DeliverAnalysisSkill(vcs=vcs, ingestion=ingestion, inline_comments_enabled=True)

    await skill.execute(DeliverAnalysisInput(context=merge_context, output=output, diff_text=DIFF))

    assert vcs.create_review.await_count == 2
    retry = vcs.create_review.await_args
    assert retry.kwargs["comments"] == []
    assert "Inline comments (fallback)" in retry.args[3]
    assert "`src/Cart.java:12`" in retry.args[3]
