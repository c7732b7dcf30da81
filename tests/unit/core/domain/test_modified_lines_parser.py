"""Unit tests: parse_modified_lines (per-class modified-lines report)."""

from merge_conflict_analyzer.core.domain.analysis.services import parse_modified_lines

REPORT = """Class: com.acme.Cart
Left added lines: [4, 3, 4]
Left removed lines: []
Right added lines: [10]
Right removed lines: [13, 12]
Class: com.acme.Truncated
Left added lines: [1]
Class: com.acme.Garbled
Left added lines: [one]
Left removed lines: []
Right added lines: []
Right removed lines: []
Class: com.acme.Order$Line
Left added lines: []
Left removed lines: [7]
Right added lines: []
Right removed lines: []
"""


def _resolve(class_name: str) -> str:
    return "src/" + class_name.split("$")[0].replace(".", "/") + ".java"


def test_parses_well_formed_sections_and_skips_the_rest():
    records = parse_modified_lines(REPORT, _resolve)

    assert [r.class_name for r in records] == ["com.acme.Cart", "com.acme.Order$Line"]


def test_line_sets_are_sorted_and_unique():
    cart = parse_modified_lines(REPORT, _resolve)[0]

    assert cart.file == "src/com/acme/Cart.java"
    assert cart.left_added == [3, 4]
    assert cart.left_removed == []
    assert cart.right_added == [10]
    assert cart.right_removed == [12, 13]


def test_serialises_with_camel_case_keys():
    order_line = parse_modified_lines(REPORT, _resolve)[1]

    assert order_line.model_dump(by_alias=True) == {
        "file": "src/com/acme/Order.java",
        "className": "com.acme.Order$Line",
        "leftAdded": [],
        "leftRemoved": [7],
        "rightAdded": [],
        "rightRemoved": [],
    }


def test_blank_report_yields_nothing():
    assert parse_modified_lines("", _resolve) == []
    assert parse_modified_lines("\n\n", _resolve) == []
