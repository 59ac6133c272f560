"""Unit tests for the file-system and in-memory fragment stores."""

from __future__ import annotations

import typing as typ

from ff_summary.store import FileFragmentStore, FragmentStore, MemoryFragmentStore

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write(root: Path, key: str, text: str) -> None:
    path = root / "demo" / f"{key}.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_file_store_reads_fragments_by_key(tmp_path: Path) -> None:
    """Keys map onto ``<root>/<project>/<key>.yaml`` files."""
    _write(tmp_path, "page/id-Scaffold_home", "name: HomePage\n")
    store = FileFragmentStore(tmp_path)

    assert store.read("demo", "page/id-Scaffold_home") == "name: HomePage\n", (
        "expected fragment text to be returned verbatim"
    )
    assert store.read("demo", "page/id-Scaffold_none") is None, (
        "expected None for a missing fragment"
    )
    assert store.read("other", "page/id-Scaffold_home") is None, (
        "expected None for an unsynced project"
    )


def test_file_store_lists_keys_under_prefix(tmp_path: Path) -> None:
    """Listing returns every key starting with the prefix, nested or not."""
    node = "page/id-Scaffold_home/page-widget-tree-outline/node/id-Button_b"
    for key in (
        f"{node}/trigger_actions/id-ON_TAP",
        f"{node}/trigger_actions/id-ON_TAP/action/id-a1",
        f"{node}/trigger_actions/id-ON_LONG_PRESS",
        f"{node}/other/id-x",
    ):
        _write(tmp_path, key, "{}\n")
    (tmp_path / "demo" / node / "trigger_actions" / "notes.txt").write_text("x", encoding="utf-8")
    store = FileFragmentStore(tmp_path)

    keys = sorted(store.list_keys("demo", f"{node}/trigger_actions/"))

    assert keys == [
        f"{node}/trigger_actions/id-ON_LONG_PRESS",
        f"{node}/trigger_actions/id-ON_TAP",
        f"{node}/trigger_actions/id-ON_TAP/action/id-a1",
    ], f"unexpected keys {keys!r}"


def test_file_store_lists_partial_segment_prefixes(tmp_path: Path) -> None:
    """A prefix ending mid-segment still matches sibling files."""
    _write(tmp_path, "page/id-Scaffold_a", "name: A\n")
    _write(tmp_path, "page/id-Scaffold_b", "name: B\n")
    _write(tmp_path, "component/id-Container_c", "name: C\n")
    store = FileFragmentStore(tmp_path)

    keys = sorted(store.list_keys("demo", "page/id-Scaffold_"))

    assert keys == ["page/id-Scaffold_a", "page/id-Scaffold_b"], f"unexpected keys {keys!r}"
    assert store.list_keys("demo", "missing/dir/") == [], "expected empty listing"


def test_has_project(tmp_path: Path) -> None:
    """A project counts as synced once its directory exists."""
    _write(tmp_path, "folders", "rootFolders: []\n")

    assert FileFragmentStore(tmp_path).has_project("demo"), "expected synced project"
    assert not FileFragmentStore(tmp_path).has_project("nope"), "expected unsynced project"


def test_memory_store_matches_protocol() -> None:
    """Both stores satisfy the fragment store protocol."""
    store = MemoryFragmentStore({"demo": {"a/b": "x", "a/c": "y", "d": "z"}})

    assert isinstance(store, FragmentStore), "expected protocol conformance"
    assert isinstance(FileFragmentStore(), FragmentStore), "expected protocol conformance"
    assert sorted(store.list_keys("demo", "a/")) == ["a/b", "a/c"], "unexpected listing"
    assert store.list_keys("nope", "") == [], "expected empty listing for unknown project"
