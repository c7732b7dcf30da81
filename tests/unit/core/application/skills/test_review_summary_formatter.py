from merge_conflict_analyzer.core.application.skills.analysis.formatters.review_summary_formatter import (
    build_inline_comments,
    build_review_summary,
    format_inline_comment,
)
from merge_conflict_analyzer.core.domain.analysis import AnalysisOutput


def _output(events) -> AnalysisOutput:
    return AnalysisOutput(
        uuid="u", repository="shop", owner="acme", pull_number=7, diff="", events=events
    )


def test_summary_lists_all_four_commits(merge_context):
    body = build_review_summary(merge_context, _output([]))

    for sha in (
        merge_context.reproduced_merge_sha,
        merge_context.left_sha,
        merge_context.right_sha,
        merge_context.merge_base_sha,
    ):
        assert f"`{sha}`" in body
    assert "No interference" in body


def test_summary_counts_events(merge_context, make_event):
    events = [make_event(("A.java", 1)), make_event(("B.java", 2), event_type="DF", label="Flow")]

    body = build_review_summary(merge_context, _output(events))

    assert "**Interferences found:** 2" in body
    assert "- [DF] Flow" in body


def test_inline_comment_skips_events_outside_diff(make_event):
    inside = make_event(("Gone.java", 5), ("Cart.java", 8))
    outside = make_event(("Gone.java", 5))
    no_line = make_event(("Cart.java", 0))

    comments = build_inline_comments([inside, outside, no_line], {"Cart.java"})

    assert [(c.path, c.line) for c in comments] == [("Cart.java", 8)]


def test_inline_comment_describes_each_node(make_event):
    event = make_event(("A.java", 1), {"file": "B.java", "line": 2, "branch": "R", "kind": "sink"})

    text = format_inline_comment(event)

    assert "- (L) declaration `A.java:1` in `run`" in text
    assert "- (R) sink `B.java:2` in `run`" in text
