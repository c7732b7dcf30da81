"""Unit tests: FileIndex (class-name -> source path, never raising)."""

from pathlib import Path

import pytest

from merge_conflict_analyzer.core.domain.analysis import UNKNOWN_FILE
from merge_conflict_analyzer.infrastructure.common.filesystem.file_locator import (
    FileIndex,
    class_to_relative_path,
)


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    for rel in (
        "core/src/main/java/com/acme/Cart.java",
        "web/src/main/java/com/acme/web/Cart.java",
        "target/classes/com/acme/Stale.java",
        "core/src/main/java/com/acme/build/Builder.java",
        "core/src/main/java/com/acme/out/Printer.java",
        ".git/objects/com/acme/Hidden.java",
        "README.md",
    ):
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {rel}\n", encoding="utf-8")
    return tmp_path


@pytest.mark.parametrize(
    ("class_name", "expected"),
    [
        ("com.acme.Cart", "com/acme/Cart.java"),
        ("com.acme.Cart$Item", "com/acme/Cart.java"),
        ("Main", "Main.java"),
        ("  ", None),
        ("", None),
    ],
)
def test_class_to_relative_path(class_name, expected):
    assert class_to_relative_path(class_name) == expected


def test_resolves_class_by_package_suffix(repo):
    index = FileIndex(repo)

    assert index.resolve_class("com.acme.Cart") == "core/src/main/java/com/acme/Cart.java"
    assert index.resolve_class("com.acme.web.Cart$1") == "web/src/main/java/com/acme/web/Cart.java"


@pytest.mark.parametrize("class_name", ["com.acme.Ghost", "", "com.acme.Stale", "acme.Cart2"])
def test_unresolvable_names_map_to_sentinel(repo, class_name):
    assert FileIndex(repo).resolve_class(class_name) == UNKNOWN_FILE


def test_resolve_path_only_accepts_indexed_files(repo):
    index = FileIndex(repo)

    assert index.resolve_path("README.md") == "README.md"
    assert index.resolve_path("/README.md") == "README.md"
    assert index.resolve_path("docs/README.md") == UNKNOWN_FILE
    assert index.resolve_path(UNKNOWN_FILE) == UNKNOWN_FILE


def test_read_text_stays_inside_the_checkout(repo, tmp_path):
    (tmp_path.parent / "secret.txt").write_text("nope", encoding="utf-8")
    index = FileIndex(repo)

    assert index.read_text("README.md") == "// README.md\n"
    assert index.read_text("../secret.txt") is None
    assert index.read_text("missing.java") is None


@pytest.mark.parametrize(
    ("class_name", "expected"),
    [
        ("com.acme.build.Builder", "core/src/main/java/com/acme/build/Builder.java"),
        ("com.acme.out.Printer$Line", "core/src/main/java/com/acme/out/Printer.java"),
    ],
)
def test_packages_named_like_build_outputs_are_indexed(repo, class_name, expected):
    assert FileIndex(repo).resolve_class(class_name) == expected


def test_root_build_outputs_and_vcs_metadata_are_skipped(repo):
    index = FileIndex(repo)

    assert index.resolve_path("target/classes/com/acme/Stale.java") == UNKNOWN_FILE
    assert index.resolve_class("com.acme.Hidden") == UNKNOWN_FILE
