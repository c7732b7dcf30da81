"""Keeps a copy of the tool's raw reports for local debugging."""

import shutil
from pathlib import Path

import structlog

from merge_conflict_analyzer.core.application.ports import ReportArchivePort

logger = structlog.get_logger()

STDOUT_FILE_NAME = "out.txt"


class FilesystemReportArchive(ReportArchivePort):
    def __init__(self, reports_dir: Path, output_file: str, modified_lines_file: str) -> None:
        self._reports_dir = reports_dir
        self._report_files = (output_file, modified_lines_file)

    def archive(self, repo: str, checkout_dir: Path, tool_stdout: str | None) -> None:
        target = self._reports_dir / repo
        target.mkdir(parents=True, exist_ok=True)
        copied: list[str] = []

        if tool_stdout is not None:
            (target / STDOUT_FILE_NAME).write_text(tool_stdout, encoding="utf-8")
            copied.append(STDOUT_FILE_NAME)

        candidates = [checkout_dir / name for name in self._report_files]
        candidates.extend(sorted(checkout_dir.glob("*.csv")))
        for source in candidates:
            if source.is_file():
                shutil.copy2(source, target / source.name)
                copied.append(source.name)

        logger.info("Analysis reports archived", target=str(target), files=copied)
