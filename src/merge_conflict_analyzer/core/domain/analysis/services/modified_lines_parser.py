"""Parser for the tool's supplementary modified-lines report.

The report is a sequence of per-class sections::

    Class: com.acme.Foo
    Left added lines: [3, 4]
    Left removed lines: []
    Right added lines: [10]
    Right removed lines: [12, 13]
"""

import re
from collections.abc import Callable

import structlog

from merge_conflict_analyzer.core.domain.analysis.analysis_output import ModifiedLinesRecord

logger = structlog.get_logger()

_SECTION_START_RE = re.compile(r"^(?=Class:)", re.MULTILINE)
_FIELD_RE = re.compile(r"^\s*(?P<key>[A-Za-z ]+?)\s*:\s*(?P<value>.*?)\s*$")
_EXPECTED_FIELDS = 5

_LINE_FIELDS = {
    "left added lines": "left_added",
    "left removed lines": "left_removed",
    "right added lines": "right_added",
    "right removed lines": "right_removed",
}


def parse_modified_lines(
    report_text: str, resolve_file: Callable[[str], str]
) -> list[ModifiedLinesRecord]:
    """Parse every well-formed section; incomplete or malformed sections are skipped."""
    records: list[ModifiedLinesRecord] = []
    for section in _SECTION_START_RE.split(report_text or ""):
        if not section.strip():
            continue
        record = _parse_section(section, resolve_file)
        if record is not None:
            records.append(record)
    return records


def _parse_section(
    section: str, resolve_file: Callable[[str], str]
) -> ModifiedLinesRecord | None:
    fields = _split_fields(section)
    class_name = fields.get("class", "")
    if len(fields) < _EXPECTED_FIELDS or not class_name:
        logger.warning("Skipping incomplete modified-lines section", fields_found=len(fields))
        return None
    try:
        line_sets = {attr: _parse_line_set(fields[key]) for key, attr in _LINE_FIELDS.items()}
    except (KeyError, ValueError):
        logger.warning("Skipping malformed modified-lines section", class_name=class_name)
        return None
    return ModifiedLinesRecord(file=resolve_file(class_name), class_name=class_name, **line_sets)


def _split_fields(section: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    for raw_line in section.splitlines():
        match = _FIELD_RE.match(raw_line)
        if match:
            fields[match.group("key").strip().lower()] = match.group("value")
    return fields


def _parse_line_set(value: str) -> list[int]:
    inner = value.strip()
    if not (inner.startswith("[") and inner.endswith("]")):
        raise ValueError(f"Not a line list: {value!r}")
    numbers = {int(token) for token in inner[1:-1].split(",") if token.strip()}
    return sorted(numbers)
