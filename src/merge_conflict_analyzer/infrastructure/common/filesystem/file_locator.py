"""Class-name to source-file resolution over a repository checkout.

The tree is walked once and indexed by file name; every lookup is then a
dictionary hit plus a suffix check instead of a fresh recursive search.
"""

import os
from collections import defaultdict
from pathlib import Path, PurePosixPath

import structlog

from merge_conflict_analyzer.core.application.ports import FileLocatorPort
from merge_conflict_analyzer.core.domain.analysis import UNKNOWN_FILE

logger = structlog.get_logger()

# Tool and VCS metadata, skipped at any depth.
_IGNORED_DIRS = frozenset({".git", "node_modules", ".gradle", ".idea"})
# Build outputs, skipped only directly under the checkout root: a source
# package may legitimately be named `build` or `out`.
_ROOT_BUILD_DIRS = frozenset({"target", "build", "out"})


class FileIndex(FileLocatorPort):
    def __init__(self, root: Path, source_extension: str = ".java") -> None:
        self.root = root
        self._extension = source_extension
        self._by_name: dict[str, list[str]] = defaultdict(list)
        self._build()

    def _build(self) -> None:
        count = 0
        for dirpath, dirnames, filenames in os.walk(self.root):
            rel_dir = PurePosixPath(Path(dirpath).relative_to(self.root).as_posix())
            ignored = _IGNORED_DIRS | _ROOT_BUILD_DIRS if str(rel_dir) == "." else _IGNORED_DIRS
            dirnames[:] = sorted(d for d in dirnames if d not in ignored)
            for name in sorted(filenames):
                self._by_name[name].append(str(rel_dir / name) if str(rel_dir) != "." else name)
                count += 1
        logger.debug("File index built", root=str(self.root), files=count)

    def resolve_class(self, class_name: str) -> str:
        candidate = class_to_relative_path(class_name, self._extension)
        if candidate is None:
            return UNKNOWN_FILE
        for path in self._by_name.get(PurePosixPath(candidate).name, []):
            if path == candidate or path.endswith("/" + candidate):
                return path
        return UNKNOWN_FILE

    def resolve_path(self, relative_path: str) -> str:
        if not relative_path or relative_path == UNKNOWN_FILE:
            return UNKNOWN_FILE
        normalized = PurePosixPath(relative_path).as_posix().lstrip("/")
        if normalized in self._by_name.get(PurePosixPath(normalized).name, []):
            return normalized
        return UNKNOWN_FILE

    def read_text(self, relative_path: str) -> str | None:
        path = (self.root / relative_path).resolve()
        if not path.is_relative_to(self.root.resolve()):
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None


def class_to_relative_path(class_name: str, extension: str = ".java") -> str | None:
    """``com.acme.Foo$Inner`` -> ``com/acme/Foo.java``; None for blank names."""
    outer = class_name.strip().split("$", 1)[0]
    parts = [part for part in outer.split(".") if part]
    if not parts:
        return None
    return "/".join(parts) + extension
