import re

_DIFF_HEADER_RE = re.compile(r"^diff --git a/(?P<old>\S+) b/(?P<new>\S+)", re.MULTILINE)


def files_in_diff(diff_text: str) -> set[str]:
    """Return every path named by a ``diff --git a/<path> b/<path>`` header."""
    paths: set[str] = set()
    for match in _DIFF_HEADER_RE.finditer(diff_text or ""):
        paths.add(match.group("old"))
        paths.add(match.group("new"))
    return paths
