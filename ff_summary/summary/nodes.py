"""Resolve per-node detail from a node's own fragment.

Each node fragment declares a widget ``type``, an optional ``name`` and a
``props`` mapping whose shape depends on the widget family. Families are
matched through :data:`WIDGET_FAMILIES`, an ordered table of
``(widget types, extractor)`` pairs; new families are appended to it.

Resolution never raises: a missing or unparseable fragment degrades to a
record whose type is inferred from the node id.

Examples
--------
>>> from ff_summary.summary.nodes import infer_type_from_id, resolve_value
>>> infer_type_from_id("Button_77xk")
'Button'
>>> resolve_value({"inputValue": {"themeColor": "primary"}})
'[theme:primary]'
>>> resolve_value({"variable": {"source": "PAGE_STATE"}})
'[dynamic]'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import typing as typ

from ff_summary._constants import (
    DYNAMIC_MARKER,
    THEME_MARKER_TEMPLATE,
    component_definition_key,
    node_key,
)

from .fragments import as_mapping, load_fragment, read_fragment
from .models import FragmentParseError, NodeRecord

if typ.TYPE_CHECKING:
    from ff_summary.store import FragmentStore

logger = logging.getLogger(__name__)

TYPE_PREFIX_PATTERN = re.compile(r"^([A-Z][a-zA-Z]*)_")
NAME_LINE_PATTERN = re.compile(r"^name:\s*(.+)$", re.MULTILINE)
UNKNOWN_WIDGET_TYPE = "Unknown"
UNBOUNDED_PIXELS = frozenset({"Infinity", "inf"})

Props = cabc.Mapping[str, typ.Any]


def infer_type_from_id(node_id: str) -> str:
    """Return the ``UpperCamel`` prefix of ``node_id`` or ``"Unknown"``."""
    match = TYPE_PREFIX_PATTERN.match(node_id)
    return match.group(1) if match else UNKNOWN_WIDGET_TYPE


def resolve_value(value: object) -> str:
    """Render a literal, themed or data-bound value as display text.

    Literal scalars render as themselves, a theme reference renders as
    ``[theme:<name>]`` and a variable binding renders as ``[dynamic]``.
    Anything else renders as an empty string.
    """
    match value:
        case bool() | None:
            return ""
        case str() | int() | float():
            return str(value)
        case dict() if "inputValue" in value:
            return _resolve_input_value(value["inputValue"])
        case dict() if "variable" in value:
            return DYNAMIC_MARKER
        case _:
            return ""


def _resolve_input_value(inner: object) -> str:
    match inner:
        case bool():
            return ""
        case str() | int() | float():
            return str(inner)
        case dict() if "serializedValue" in inner:
            return str(inner["serializedValue"])
        case dict() if "themeColor" in inner:
            return THEME_MARKER_TEMPLATE.format(name=inner["themeColor"])
        case dict() if "value" in inner:
            return str(inner["value"])
        case _:
            return ""


def _dig(mapping: Props, *path: str) -> dict[str, typ.Any]:
    """Follow ``path`` through nested mappings, yielding {} at the first gap."""
    current = as_mapping(mapping)
    for segment in path:
        current = as_mapping(current.get(segment))
    return current


def _lookup(mapping: Props, *path: str) -> object:
    """Return the raw value at the end of ``path``, or None."""
    *parents, leaf = path
    return _dig(mapping, *parents).get(leaf)


def _quoted(value: str) -> str:
    return f'"{value}"' if value else ""


def extract_text(props: Props) -> str:
    """Quoted text of a plain text widget."""
    return _quoted(resolve_value(_lookup(props, "text", "textValue")))


def extract_button(props: Props) -> str:
    """Quoted label of a button-like widget."""
    return _quoted(resolve_value(_lookup(props, "button", "text", "textValue")))


def extract_image(props: Props) -> str:
    """File name (or ``[dynamic]``) plus ``[WxH]`` when both sides are finite."""
    image = _dig(props, "image")
    if not image:
        return ""
    parts: list[str] = []
    path_value = as_mapping(image.get("pathValue"))
    if path_value:
        path = resolve_value(path_value)
        if path == DYNAMIC_MARKER:
            parts.append(DYNAMIC_MARKER)
        elif path:
            parts.append(path.rsplit("/", 1)[-1] or path)

    dimensions = as_mapping(image.get("dimensions"))
    width = _pixels(dimensions, "width")
    height = _pixels(dimensions, "height")
    if width and height and not UNBOUNDED_PIXELS.intersection((width, height)):
        parts.append(f"[{width}x{height}]")
    return " ".join(parts)


def _pixels(dimensions: Props, side: str) -> str:
    pixels = as_mapping(dimensions.get(side)).get("pixelsValue")
    return resolve_value(pixels) if pixels else ""


def extract_icon(props: Props) -> str:
    """Icon name of an icon widget."""
    name = _dig(props, "icon", "iconDataValue", "inputValue").get("name")
    return str(name) if name else ""


def extract_text_field(props: Props) -> str:
    """Hint text of a text input, formatted as ``hint: "<text>"``."""
    hint = resolve_value(
        _lookup(props, "textField", "inputDecoration", "hintText", "textValue")
    )
    return f'hint: "{hint}"' if hint else ""


def extract_toggle(props: Props) -> str:
    """Label of a checkbox, toggle or switch."""
    toggle = (
        as_mapping(props.get("checkbox"))
        or as_mapping(props.get("toggle"))
        or as_mapping(props.get("switchWidget"))
    )
    return resolve_value(toggle.get("labelValue"))


WIDGET_FAMILIES: list[tuple[frozenset[str], cabc.Callable[[Props], str]]] = [
    (frozenset({"Text", "RichText", "AutoSizeText"}), extract_text),
    (frozenset({"Button", "IconButton", "FFButtonWidget"}), extract_button),
    (frozenset({"Image", "CachedNetworkImage"}), extract_image),
    (frozenset({"Icon"}), extract_icon),
    (frozenset({"TextField", "TextFormField"}), extract_text_field),
    (
        frozenset({"Checkbox", "CheckboxListTile", "Switch", "ToggleIcon"}),
        extract_toggle,
    ),
]


def extract_detail(widget_type: str, props: Props) -> str:
    """Return the family-specific detail for ``widget_type`` (empty if unknown)."""
    for members, extractor in WIDGET_FAMILIES:
        if widget_type in members:
            return extractor(props)
    return ""


def resolve_component_name(
    store: FragmentStore, project_id: str, component_id: str
) -> str | None:
    """Return the declared name of a reusable component, or None."""
    text = read_fragment(store, project_id, component_definition_key(component_id))
    if not text:
        return None
    # Only the top-level name is needed; a line match avoids a full parse.
    match = NAME_LINE_PATTERN.search(text)
    return match.group(1).strip() if match else None


def resolve_node_record(
    store: FragmentStore, project_id: str, tree_namespace: str, node_id: str
) -> NodeRecord:
    """Load a node fragment and return its widget type, name and detail.

    Parameters
    ----------
    store : FragmentStore
        Source of fragments.
    project_id : str
        Project the widget tree belongs to.
    tree_namespace : str
        Key of the outline the node lives in.
    node_id : str
        Node id as declared by the outline.

    Returns
    -------
    NodeRecord
        Resolved record, or a degraded one when the fragment is absent or bad.
    """
    fallback = NodeRecord(widget_type=infer_type_from_id(node_id))
    key = node_key(tree_namespace, node_id)
    try:
        document = load_fragment(store, project_id, key)
    except FragmentParseError as exc:
        logger.debug("Node fragment %s unparseable: %s", key, exc)
        return fallback
    if document is None:
        return fallback

    raw_type = document.get("type")
    widget_type = raw_type if isinstance(raw_type, str) and raw_type else None
    record = dc.replace(
        fallback,
        widget_type=widget_type or fallback.widget_type,
        display_name=str(document.get("name") or ""),
        render_detail=extract_detail(
            widget_type or fallback.widget_type, as_mapping(document.get("props"))
        ),
    )

    component_id = as_mapping(document.get("componentClassKeyRef")).get("key")
    if isinstance(component_id, str) and component_id:
        record = dc.replace(
            record,
            component_id=component_id,
            component_name=resolve_component_name(store, project_id, component_id),
        )
    return record


__all__ = [
    "UNKNOWN_WIDGET_TYPE",
    "WIDGET_FAMILIES",
    "extract_detail",
    "infer_type_from_id",
    "resolve_component_name",
    "resolve_node_record",
    "resolve_value",
]
