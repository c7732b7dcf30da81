"""Turns the analysis tool's raw results into a deduplicated, file-resolved payload."""

import asyncio
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from merge_conflict_analyzer.core.application.exceptions import AnalysisOutputError
from merge_conflict_analyzer.core.application.ports import FileLocatorPort
from merge_conflict_analyzer.core.application.skills.analysis.contracts.analysis_contracts import (
    EnrichAnalysisInput,
    EnrichedAnalysis,
)
from merge_conflict_analyzer.core.application.skills.skill import BaseSkill
from merge_conflict_analyzer.core.domain.analysis import (
    UNKNOWN_FILE,
    AnalysisData,
    CodeLocation,
    InterferenceEvent,
    MissingFileRecord,
    ModifiedLinesRecord,
)
from merge_conflict_analyzer.core.domain.analysis.services import (
    files_in_diff,
    filter_duplicated_events,
    parse_modified_lines,
)

logger = structlog.get_logger()

DEFAULT_OUTPUT_FILE = "out.json"
DEFAULT_MODIFIED_LINES_FILE = "modified-lines.txt"


class EnrichAnalysisResultSkill(BaseSkill[EnrichAnalysisInput, EnrichedAnalysis]):
    """Parse -> resolve files -> deduplicate -> modified lines -> missing files.

    Only a missing or unreadable results file aborts the step. Every later
    sub-step degrades to a sentinel or an empty collection.
    """

    def __init__(
        self,
        locator_factory: Callable[[Path], FileLocatorPort],
        output_file_name: str = DEFAULT_OUTPUT_FILE,
        modified_lines_file_name: str = DEFAULT_MODIFIED_LINES_FILE,
    ) -> None:
        self._locator_factory = locator_factory
        self._output_file_name = output_file_name
        self._modified_lines_file_name = modified_lines_file_name

    async def execute(self, input_data: EnrichAnalysisInput) -> EnrichedAnalysis:
        # Indexing the checkout and reading results block on the filesystem
        return await asyncio.to_thread(self._enrich, input_data)

    def _enrich(self, input_data: EnrichAnalysisInput) -> EnrichedAnalysis:
        raw_events = self._load_events(input_data.checkout_dir / self._output_file_name)
        locator = self._locator_factory(input_data.checkout_dir)

        for event in raw_events:
            self._resolve_event_files(event, locator)
        events = filter_duplicated_events(raw_events)
        modified_lines = self._extract_modified_lines(input_data.checkout_dir, locator)
        missing_files = self._discover_missing_files(events, input_data.diff_text, locator)

        logger.info(
            "Analysis results enriched",
            raw_events=len(raw_events),
            unique_events=len(events),
            modified_line_sections=len(modified_lines),
            missing_files=len(missing_files),
        )
        return EnrichedAnalysis(
            events=events,
            data=AnalysisData(modified_lines=modified_lines, missing_files=missing_files),
        )

    # ── Parsing ──────────────────────────────────────────────────────

    def _load_events(self, path: Path) -> list[InterferenceEvent]:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise AnalysisOutputError(
                f"Analysis results file not found: {path.name}", context={"path": str(path)}
            ) from exc
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise AnalysisOutputError(
                f"Analysis results file is unreadable: {exc}", context={"path": str(path)}
            ) from exc
        return self._validate_events(_extract_event_list(payload, path))

    @staticmethod
    def _validate_events(items: list[Any]) -> list[InterferenceEvent]:
        events: list[InterferenceEvent] = []
        for index, item in enumerate(items):
            try:
                events.append(InterferenceEvent.model_validate(item))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed interference event",
                    event_index=index,
                    error_type="ValidationError",
                    error_details=str(exc),
                )
        return events

    # ── File resolution ──────────────────────────────────────────────

    def _resolve_event_files(self, event: InterferenceEvent, locator: FileLocatorPort) -> None:
        for node in event.interference:
            _resolve_location(node.location, locator)
            for frame in node.stack_trace or []:
                _resolve_location(frame, locator)

    # ── Modified lines ───────────────────────────────────────────────

    def _extract_modified_lines(
        self, checkout_dir: Path, locator: FileLocatorPort
    ) -> list[ModifiedLinesRecord]:
        path = checkout_dir / self._modified_lines_file_name
        if not path.is_file():
            logger.info("No modified-lines report produced", file_name=path.name)
            return []
        try:
            report = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("Modified-lines report unreadable", error_details=str(exc))
            return []
        return parse_modified_lines(report, locator.resolve_class)

    # ── Missing files ────────────────────────────────────────────────

    @staticmethod
    def _discover_missing_files(
        events: list[InterferenceEvent], diff_text: str, locator: FileLocatorPort
    ) -> list[MissingFileRecord]:
        in_diff = files_in_diff(diff_text)
        records: list[MissingFileRecord] = []
        seen: set[str] = set()
        for event in events:
            for node in event.interference:
                for frame in node.stack_trace or []:
                    path = frame.file
                    if path == UNKNOWN_FILE or not path or path in in_diff or path in seen:
                        continue
                    seen.add(path)
                    content = locator.read_text(path)
                    if content is None:
                        logger.warning("Stack trace file unreadable", file_path=path)
                        continue
                    records.append(MissingFileRecord(file=path, content=content))
        return records


def _extract_event_list(payload: Any, path: Path) -> list[Any]:
    if isinstance(payload, dict):
        payload = payload.get("events", payload.get("dependencies"))
    if not isinstance(payload, list):
        raise AnalysisOutputError(
            "Analysis results file does not contain an event list", context={"path": str(path)}
        )
    return payload


def _resolve_location(location: CodeLocation, locator: FileLocatorPort) -> None:
    if location.class_name:
        location.file = locator.resolve_class(location.class_name)
    else:
        location.file = locator.resolve_path(location.file)
