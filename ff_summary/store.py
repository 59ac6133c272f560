"""Read-only access to synced project fragments.

The sync layer mirrors every fragment of a project into a directory tree, one
YAML file per fragment key::

    <cache_root>/<project_id>/page/id-Scaffold_x.yaml
    <cache_root>/<project_id>/page/id-Scaffold_x/page-widget-tree-outline.yaml

:class:`FileFragmentStore` reads that tree; :class:`MemoryFragmentStore` serves
the same contract from a dictionary. Neither ever writes.

Examples
--------
>>> from ff_summary.store import MemoryFragmentStore
>>> store = MemoryFragmentStore({"demo": {"folders": "rootFolders: []"}})
>>> store.read("demo", "folders")
'rootFolders: []'
>>> store.read("demo", "page/id-Scaffold_missing") is None
True
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

FRAGMENT_SUFFIX = ".yaml"
DEFAULT_CACHE_DIR = Path(".ff-cache")


@typ.runtime_checkable
class FragmentStore(typ.Protocol):
    """Keyed text store consumed by the summary pipeline."""

    def read(self, project_id: str, key: str) -> str | None:
        """Return the fragment text stored under ``key`` or None when absent."""
        ...

    def list_keys(self, project_id: str, prefix: str) -> list[str]:
        """Return every stored key starting with ``prefix``, in no fixed order."""
        ...


class FileFragmentStore:
    """Serve fragments from the on-disk cache written by the sync layer."""

    def __init__(self, cache_root: Path = DEFAULT_CACHE_DIR) -> None:
        self.cache_root = cache_root

    def project_dir(self, project_id: str) -> Path:
        """Return the directory holding every fragment of ``project_id``."""
        return self.cache_root / project_id

    def has_project(self, project_id: str) -> bool:
        """Return True when the project has been synced at least once."""
        return self.project_dir(project_id).is_dir()

    def read(self, project_id: str, key: str) -> str | None:
        path = self.project_dir(project_id) / f"{key}{FRAGMENT_SUFFIX}"
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def list_keys(self, project_id: str, prefix: str) -> list[str]:
        project_dir = self.project_dir(project_id)
        # Only walk the deepest directory the prefix pins down.
        head, _, _ = prefix.rpartition("/")
        start = project_dir / head if head else project_dir
        if not start.is_dir():
            return []
        keys: list[str] = []
        for path in start.rglob(f"*{FRAGMENT_SUFFIX}"):
            if not path.is_file():
                continue
            key = path.relative_to(project_dir).as_posix()[: -len(FRAGMENT_SUFFIX)]
            if key.startswith(prefix):
                keys.append(key)
        return keys


class MemoryFragmentStore:
    """Serve fragments from an in-memory ``{project_id: {key: text}}`` mapping."""

    def __init__(
        self, projects: cabc.Mapping[str, cabc.Mapping[str, str]] | None = None
    ) -> None:
        self._projects: dict[str, dict[str, str]] = {
            project_id: dict(fragments)
            for project_id, fragments in (projects or {}).items()
        }

    def has_project(self, project_id: str) -> bool:
        return project_id in self._projects

    def read(self, project_id: str, key: str) -> str | None:
        return self._projects.get(project_id, {}).get(key)

    def list_keys(self, project_id: str, prefix: str) -> list[str]:
        fragments = self._projects.get(project_id, {})
        return [key for key in fragments if key.startswith(prefix)]


__all__ = [
    "DEFAULT_CACHE_DIR",
    "FRAGMENT_SUFFIX",
    "FileFragmentStore",
    "FragmentStore",
    "MemoryFragmentStore",
]
