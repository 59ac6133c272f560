"""Load fragment text into plain mappings.

Every fragment is a small YAML document. Parsing goes through ruamel.yaml in
safe mode pinned to YAML 1.2, the same way the configuration loader reads its
file, and anything that is not a mapping counts as unparseable.
"""

from __future__ import annotations

import logging
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import FragmentParseError

if typ.TYPE_CHECKING:
    from ff_summary.store import FragmentStore

logger = logging.getLogger(__name__)


def _build_safe_yaml() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def parse_fragment(text: str, *, key: str = "<fragment>") -> dict[str, typ.Any]:
    """Parse fragment text into a mapping.

    Parameters
    ----------
    text : str
        Raw YAML text of one fragment.
    key : str, optional
        Fragment key, used only to make error messages traceable.

    Returns
    -------
    dict[str, Any]
        The top-level mapping of the document.

    Raises
    ------
    FragmentParseError
        If the text is not valid YAML or its top level is not a mapping.
    """
    # ruamel's loaders are not thread-safe; build one per call.
    try:
        loaded = _build_safe_yaml().load(text)
    except YAMLError as exc:
        msg = f"Fragment '{key}' is not valid YAML: {exc}"
        raise FragmentParseError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Fragment '{key}' must contain a mapping at the top level."
        raise FragmentParseError(msg)
    return loaded


def read_fragment(store: FragmentStore, project_id: str, key: str) -> str | None:
    """Return fragment text, treating an unreadable fragment like an absent one."""
    try:
        return store.read(project_id, key)
    except OSError as exc:
        logger.warning("Could not read fragment %s: %s", key, exc)
        return None
    except UnicodeDecodeError as exc:
        logger.warning("Fragment %s is not valid UTF-8: %s", key, exc)
        return None


def load_fragment(
    store: FragmentStore, project_id: str, key: str
) -> dict[str, typ.Any] | None:
    """Read and parse one fragment; None when absent, FragmentParseError if bad.

    Text that cannot be decoded is reported as a parse failure, so callers
    degrade it the same way as malformed YAML.
    """
    try:
        text = store.read(project_id, key)
    except OSError as exc:
        logger.warning("Could not read fragment %s: %s", key, exc)
        return None
    except UnicodeDecodeError as exc:
        msg = f"Fragment '{key}' is not valid UTF-8: {exc}"
        raise FragmentParseError(msg) from exc
    if text is None:
        return None
    return parse_fragment(text, key=key)



def as_mapping(value: object) -> dict[str, typ.Any]:
    """Return ``value`` when it is a mapping, otherwise an empty dict."""
    if isinstance(value, dict):
        return value
    return {}


def as_list(value: object) -> list[typ.Any]:
    """Return ``value`` when it is a list, otherwise an empty list."""
    if isinstance(value, list):
        return value
    return []


__all__ = ["as_list", "as_mapping", "load_fragment", "parse_fragment", "read_fragment"]
