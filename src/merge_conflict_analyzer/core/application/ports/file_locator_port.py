from abc import ABC, abstractmethod
from pathlib import Path


class FileLocatorPort(ABC):
    """Maps class names and relative paths to files inside a checkout root."""

    root: Path

    @abstractmethod
    def resolve_class(self, class_name: str) -> str:
        """Relative path of the class's source file, or UNKNOWN_FILE."""

    @abstractmethod
    def resolve_path(self, relative_path: str) -> str:
        """The path itself when it names a checkout file, otherwise UNKNOWN_FILE."""

    @abstractmethod
    def read_text(self, relative_path: str) -> str | None:
        """Full text of a checkout file, or None when it cannot be read."""
