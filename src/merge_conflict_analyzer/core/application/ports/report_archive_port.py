from abc import ABC, abstractmethod
from pathlib import Path


class ReportArchivePort(ABC):

    @abstractmethod
    def archive(self, repo: str, checkout_dir: Path, tool_stdout: str | None) -> None:
        """Copies the tool's raw reports out of a checkout before it is removed."""
