"""Load summary settings YAML into a :class:`SummaryConfig`."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import SummaryConfig, SummaryConfigError

KNOWN_KEYS = frozenset({"cache_root", "max_workers", "project_id"})


def load_summary_config(path: Path) -> SummaryConfig:
    """Load the YAML file holding default summary settings.

    Parameters
    ----------
    path : Path
        Filesystem path to the settings file (for example ``ff-summary.yaml``).

    Returns
    -------
    SummaryConfig
        Settings with any key missing from the file left at its default.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SummaryConfigError
        If the file names an unknown setting or a value has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from ff_summary.config import load_summary_config
    >>> config = load_summary_config(Path("ff-summary.yaml"))  # doctest: +SKIP
    >>> config.max_workers  # doctest: +SKIP
    8
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    unknown = sorted(str(key) for key in raw if key not in KNOWN_KEYS)
    if unknown:
        msg = f"Unknown summary settings: {', '.join(unknown)}."
        raise SummaryConfigError(msg)

    config = SummaryConfig()
    match raw.get("cache_root"):
        case None:
            pass
        case str() as cache_root if cache_root:
            config.cache_root = Path(cache_root)
        case other:
            msg = f"cache_root must be a non-empty path string, got {other!r}."
            raise SummaryConfigError(msg)

    match raw.get("max_workers"):
        case None:
            pass
        case bool() as other:
            msg = f"max_workers must be a positive integer, got {other!r}."
            raise SummaryConfigError(msg)
        case int() as max_workers if max_workers > 0:
            config.max_workers = max_workers
        case other:
            msg = f"max_workers must be a positive integer, got {other!r}."
            raise SummaryConfigError(msg)

    match raw.get("project_id"):
        case None:
            pass
        case str() as project_id if project_id:
            config.project_id = project_id
        case other:
            msg = f"project_id must be a non-empty string, got {other!r}."
            raise SummaryConfigError(msg)
    return config


__all__ = ["load_summary_config"]
