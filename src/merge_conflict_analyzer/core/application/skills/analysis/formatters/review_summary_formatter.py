"""Pure functions for building the Markdown review posted back to the pull request."""

from merge_conflict_analyzer.core.domain.analysis import (
    UNKNOWN_FILE,
    AnalysisOutput,
    InterferenceEvent,
    InterferenceNode,
)
from merge_conflict_analyzer.core.domain.merge import MergeContext
from merge_conflict_analyzer.core.domain.review import ReviewComment


def build_review_summary(context: MergeContext, output: AnalysisOutput | None) -> str:
    """Summary body listing the analyzed commits and the number of interferences."""
    lines = [
        "## Semantic merge conflict analysis",
        "",
        "| | Commit |",
        "|---|---|",
        f"| Merge | `{context.reproduced_merge_sha}` |",
        f"| Left (L) | `{context.left_sha}` |",
        f"| Right (R) | `{context.right_sha}` |",
        f"| Merge base | `{context.merge_base_sha}` |",
        "",
    ]
    if output is None:
        lines.append("> The analysis tool produced no usable output for this merge.")
    elif not output.events:
        lines.append("> No interference between the two branches was found.")
    else:
        lines.append(f"**Interferences found:** {len(output.events)}")
        lines.extend(f"- {_event_headline(event)}" for event in output.events)
    return "\n".join(lines)


def build_inline_comments(
    events: list[InterferenceEvent], diff_files: set[str]
) -> list[ReviewComment]:
    """One comment per event, anchored at its first node that lies in the PR diff."""
    comments: list[ReviewComment] = []
    for event in events:
        anchor = _anchor_node(event, diff_files)
        if anchor is None:
            continue
        comments.append(
            ReviewComment(
                path=anchor.location.file,
                line=anchor.location.line,
                body=format_inline_comment(event),
            )
        )
    return comments


def build_fallback_section(comments: list[ReviewComment]) -> str:
    lines = ["", "### Inline comments (fallback)", ""]
    for comment in comments:
        lines.append(f"- `{comment.path}:{comment.line}` {comment.body.splitlines()[0]}")
    return "\n".join(lines)


def format_inline_comment(event: InterferenceEvent) -> str:
    lines = [f"**{_event_headline(event)}**", ""]
    if event.description:
        lines += [event.description, ""]
    lines.extend(_format_node(node) for node in event.interference)
    return "\n".join(lines)


def _event_headline(event: InterferenceEvent) -> str:
    return f"[{event.type}] {event.label}".strip()


def _format_node(node: InterferenceNode) -> str:
    loc = node.location
    where = f"{loc.file}:{loc.line}" if loc.file != UNKNOWN_FILE else f"{loc.class_name}:{loc.line}"
    return f"- ({node.branch}) {node.kind} `{where}` in `{loc.method}`"


def _anchor_node(event: InterferenceEvent, diff_files: set[str]) -> InterferenceNode | None:
    for node in event.interference:
        if node.location.file in diff_files and node.location.line > 0:
            return node
    return None
