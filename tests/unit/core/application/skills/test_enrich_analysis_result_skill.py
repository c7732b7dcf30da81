"""Unit tests: EnrichAnalysisResultSkill over a real checkout tree in tmp_path."""

import json
import threading
from functools import partial
from pathlib import Path

import pytest

from merge_conflict_analyzer.core.application.exceptions import AnalysisOutputError
from merge_conflict_analyzer.core.application.skills.analysis.contracts.analysis_contracts import (
    EnrichAnalysisInput,
)
from merge_conflict_analyzer.core.application.skills.analysis.enrich_analysis_result_skill import (
    EnrichAnalysisResultSkill,
)
from merge_conflict_analyzer.core.domain.analysis import UNKNOWN_FILE
from merge_conflict_analyzer.infrastructure.common.filesystem.file_locator import FileIndex

FOO_SOURCE = "package samples;\n\npublic class Foo {\n    int total;\n}\n"
DIFF = (
    "diff --git a/src/main/java/com/acme/Cart.java b/src/main/java/com/acme/Cart.java\n"
    "@@ -1 +1 @@\n-a\n+b\n"
)


@pytest.fixture
def checkout(tmp_path: Path) -> Path:
    (tmp_path / "samples").mkdir()
    (tmp_path / "samples" / "Foo.java").write_text(FOO_SOURCE, encoding="utf-8")
    cart = tmp_path / "src" / "main" / "java" / "com" / "acme"
    cart.mkdir(parents=True)
    (cart / "Cart.java").write_text("package com.acme;\nclass Cart {}\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def skill() -> EnrichAnalysisResultSkill:
    return EnrichAnalysisResultSkill(locator_factory=partial(FileIndex, source_extension=".java"))


def _write_output(checkout: Path, payload) -> None:
    (checkout / "out.json").write_text(json.dumps(payload), encoding="utf-8")


def _stack_frame(class_name: str, line: int) -> dict:
    return {"file": "", "class": class_name, "method": "apply", "line": line}


async def test_stack_trace_file_outside_diff_is_attached(checkout, skill, event_payload):
    event = event_payload(
        {
            "file": "",
            "line": 4,
            "class_name": "com.acme.Cart",
            "stack_trace": [_stack_frame("samples.Foo", 4)],
        }
    )
    _write_output(checkout, [event])

    enriched = await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=DIFF))

    assert len(enriched.data.missing_files) == 1
    missing = enriched.data.missing_files[0]
    assert missing.file == "samples/Foo.java"
    assert missing.content == FOO_SOURCE


async def test_files_are_resolved_from_class_names(checkout, skill, event_payload):
    event = event_payload(
        {"file": "", "line": 2, "class_name": "com.acme.Cart$Item"},
        {"file": "", "line": 9, "class_name": "com.acme.Ghost", "branch": "R"},
    )
    _write_output(checkout, {"events": [event]})

    enriched = await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=DIFF))

    nodes = enriched.events[0].interference
    assert nodes[0].location.file == "src/main/java/com/acme/Cart.java"
    assert nodes[1].location.file == UNKNOWN_FILE


async def test_files_in_the_diff_are_not_attached(checkout, skill, event_payload):
    event = event_payload(
        {"file": "", "line": 1, "stack_trace": [_stack_frame("com.acme.Cart", 1)]}
    )
    _write_output(checkout, [event])

    enriched = await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=DIFF))

    assert enriched.data.missing_files == []


async def test_duplicate_events_are_removed(checkout, skill, event_payload):
    first = event_payload(("samples/Foo.java", 3), ("samples/Foo.java", 4))
    second = event_payload(("samples/Foo.java", 3), ("samples/Foo.java", 4), label="dup")
    _write_output(checkout, [first, second])

    enriched = await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=""))

    assert [e.label for e in enriched.events] == ["Override assignment"]


async def test_malformed_events_are_skipped(checkout, skill, event_payload):
    good = event_payload(("samples/Foo.java", 3))
    _write_output(checkout, [{"type": "OA", "body": {"interference": []}}, good])

    enriched = await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=""))

    assert len(enriched.events) == 1


async def test_modified_lines_report_is_parsed_when_present(checkout, skill):
    _write_output(checkout, [])
    (checkout / "modified-lines.txt").write_text(
        "Class: samples.Foo\n"
        "Left added lines: [4]\n"
        "Left removed lines: []\n"
        "Right added lines: [2, 1]\n"
        "Right removed lines: []\n",
        encoding="utf-8",
    )

    enriched = await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=""))

    [record] = enriched.data.modified_lines
    assert record.file == "samples/Foo.java"
    assert record.right_added == [1, 2]


async def test_missing_modified_lines_report_yields_empty_list(checkout, skill):
    _write_output(checkout, [])

    enriched = await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=""))

    assert enriched.events == []
    assert enriched.data.modified_lines == []


async def test_missing_results_file_aborts(checkout, skill):
    with pytest.raises(AnalysisOutputError, match="not found"):
        await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=""))


async def test_invalid_json_aborts(checkout, skill):
    (checkout / "out.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(AnalysisOutputError, match="unreadable"):
        await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=""))


async def test_index_build_and_parsing_run_off_the_event_loop_thread(checkout):
    _write_output(checkout, [])
    index_threads: list[threading.Thread] = []

    def recording_factory(root: Path) -> FileIndex:
        index_threads.append(threading.current_thread())
        return FileIndex(root, source_extension=".java")

    skill = EnrichAnalysisResultSkill(locator_factory=recording_factory)
    await skill.execute(EnrichAnalysisInput(checkout_dir=checkout, diff_text=""))

    assert index_threads
    assert index_threads[0] is not threading.current_thread()
