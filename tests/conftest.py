from typing import Any

import pytest

from merge_conflict_analyzer.core.domain.analysis import InterferenceEvent
from merge_conflict_analyzer.core.domain.merge import MergeContext, MergeParents

LEFT_SHA = "1" * 40
RIGHT_SHA = "2" * 40
BASE_SHA = "3" * 40
MERGE_SHA = "4" * 40


def _node(
    file: str,
    line: int,
    branch: str = "L",
    kind: str = "declaration",
    class_name: str = "",
    method: str = "run",
    stack_trace: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    node: dict[str, Any] = {
        "type": kind,
        "branch": branch,
        "text": "total = price * qty;",
        "location": {"file": file, "class": class_name, "method": method, "line": line},
    }
    if stack_trace is not None:
        node["stackTrace"] = stack_trace
    return node


@pytest.fixture
def event_payload():
    """Build a wire-format interference event from ``(file, line)`` tuples or node kwargs."""

    def _build(*nodes: tuple | dict, event_type: str = "OA", label: str = "Override assignment"):
        return {
            "type": event_type,
            "label": label,
            "body": {
                "description": "Left and right both assign the same field.",
                "interference": [_node(**n) if isinstance(n, dict) else _node(*n) for n in nodes],
            },
        }

    return _build


@pytest.fixture
def make_event(event_payload):
    def _build(*nodes: tuple | dict, **kwargs: Any) -> InterferenceEvent:
        return InterferenceEvent.model_validate(event_payload(*nodes, **kwargs))

    return _build


@pytest.fixture
def merge_parents() -> MergeParents:
    return MergeParents(left_sha=LEFT_SHA, right_sha=RIGHT_SHA)


@pytest.fixture
def merge_context() -> MergeContext:
    return MergeContext(
        owner="acme",
        repo="shop",
        pull_number=7,
        left_sha=LEFT_SHA,
        right_sha=RIGHT_SHA,
        merge_base_sha=BASE_SHA,
        reproduced_merge_sha=MERGE_SHA,
    )
