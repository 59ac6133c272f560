"""Header metadata for page and component summaries.

Covers three lookups that sit beside the widget tree:

* locating a page or component by id or by case-insensitive name,
* reading its declared name, description, parameters and state fields,
* mapping a page onto the folder it is filed under.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import re
import typing as typ

from ff_summary._constants import (
    COMPONENT_KIND,
    FOLDERS_KEY,
    ID_PREFIX,
    PAGE_KIND,
    UNMAPPED_FOLDER,
    root_key,
)

from .fragments import as_list, as_mapping, load_fragment, read_fragment
from .models import (
    ComponentMeta,
    FragmentParseError,
    PageMeta,
    ParamInfo,
    TargetNotFoundError,
)
from .nodes import NAME_LINE_PATTERN

if typ.TYPE_CHECKING:
    from ff_summary.store import FragmentStore

logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "unknown"
UNKNOWN_PARAM = "unknown"
TARGET_ID_PREFIXES = {PAGE_KIND: "Scaffold_", COMPONENT_KIND: "Container_"}

Document = cabc.Mapping[str, typ.Any]


def resolve_data_type(data_type: object) -> str:
    """Return a readable label for a declared ``dataType`` mapping.

    Examples
    --------
    >>> resolve_data_type({"listType": {"scalarType": "String"}})
    'List<String>'
    >>> resolve_data_type({"enumType": {"enumIdentifier": {"name": "Tier"}}})
    'Enum:Tier'
    >>> resolve_data_type({})
    'unknown'
    """
    declared = as_mapping(data_type)
    if declared.get("listType"):
        inner = as_mapping(declared["listType"]).get("scalarType") or UNKNOWN_TYPE
        return f"List<{inner}>"
    if declared.get("scalarType") == "DataStruct":
        identifier = as_mapping(as_mapping(declared.get("subType")).get("dataStructIdentifier"))
        name = identifier.get("name")
        return f"DataStruct:{name}" if name else "DataStruct"
    if declared.get("enumType"):
        name = as_mapping(as_mapping(declared["enumType"]).get("enumIdentifier")).get("name")
        return f"Enum:{name}" if name else "Enum"
    return str(declared.get("scalarType") or UNKNOWN_TYPE)


def _optional_text(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def parse_params(raw: object) -> tuple[ParamInfo, ...]:
    """Return the declared parameters of a page or component document."""
    params: list[ParamInfo] = []
    for value in as_mapping(raw).values():
        param = as_mapping(value)
        name = as_mapping(param.get("identifier")).get("name") or UNKNOWN_PARAM
        params.append(
            ParamInfo(
                name=str(name),
                data_type=resolve_data_type(param.get("dataType")),
                default_value=_optional_text(
                    as_mapping(param.get("defaultValue")).get("serializedValue")
                ),
            )
        )
    return tuple(params)


def parse_state_fields(raw: object) -> tuple[ParamInfo, ...]:
    """Return the state fields declared under ``classModel.stateFields``."""
    fields: list[ParamInfo] = []
    for value in as_list(raw):
        parameter = as_mapping(as_mapping(value).get("parameter"))
        if not parameter:
            continue
        name = as_mapping(parameter.get("identifier")).get("name") or UNKNOWN_PARAM
        defaults = as_list(as_mapping(value).get("serializedDefaultValue"))
        fields.append(
            ParamInfo(
                name=str(name),
                data_type=resolve_data_type(parameter.get("dataType")),
                default_value=_optional_text(defaults[0]) if defaults else None,
            )
        )
    return tuple(fields)


def extract_page_meta(
    document: Document | None, scaffold_id: str, folder: str
) -> PageMeta:
    """Build page header metadata; an absent document yields the id alone."""
    if document is None:
        return PageMeta(name=scaffold_id, scaffold_id=scaffold_id, folder=folder)
    return PageMeta(
        name=str(document.get("name") or scaffold_id),
        scaffold_id=scaffold_id,
        folder=folder,
        params=parse_params(document.get("params")),
        state_fields=parse_state_fields(
            as_mapping(document.get("classModel")).get("stateFields")
        ),
    )


def extract_component_meta(
    document: Document | None, container_id: str
) -> ComponentMeta:
    """Build component header metadata; an absent document yields the id alone."""
    if document is None:
        return ComponentMeta(name=container_id, container_id=container_id)
    return ComponentMeta(
        name=str(document.get("name") or container_id),
        container_id=container_id,
        description=str(document.get("description") or ""),
        params=parse_params(document.get("params")),
    )


def parse_folder_mapping(document: Document) -> dict[str, str]:
    """Map each filed page id onto the name of its folder.

    Parameters
    ----------
    document : Mapping[str, Any]
        Parsed ``folders`` fragment with a ``rootFolders`` tree of
        ``{key, name, children}`` entries and a flat
        ``widgetClassKeyToFolderKey`` mapping.

    Returns
    -------
    dict[str, str]
        Page id to folder name. Folder keys absent from the tree map to
        themselves.
    """
    names: dict[str, str] = {}
    stack = list(as_list(document.get("rootFolders")))
    while stack:
        folder = as_mapping(stack.pop())
        key = folder.get("key")
        if key:
            names[str(key)] = str(folder.get("name") or key)
        stack.extend(as_list(folder.get("children")))

    mapping: dict[str, str] = {}
    for widget_id, folder_key in as_mapping(document.get("widgetClassKeyToFolderKey")).items():
        if folder_key:
            mapping[str(widget_id)] = names.get(str(folder_key), str(folder_key))
    return mapping


def lookup_folder(store: FragmentStore, project_id: str, scaffold_id: str) -> str:
    """Return the folder a page is filed under, or ``(unmapped)``."""
    try:
        document = load_fragment(store, project_id, FOLDERS_KEY)
    except FragmentParseError as exc:
        logger.debug("Folder map unparseable: %s", exc)
        return UNMAPPED_FOLDER
    if document is None:
        return UNMAPPED_FOLDER
    return parse_folder_mapping(document).get(scaffold_id, UNMAPPED_FOLDER)


def resolve_target(
    store: FragmentStore,
    project_id: str,
    kind: str,
    *,
    name: str | None = None,
    target_id: str | None = None,
) -> str:
    """Return the id of the page or component selected by id or name.

    A ``target_id`` whose top-level document exists wins outright. Otherwise
    every top-level document of ``kind`` is scanned and its ``name`` line
    compared with ``name`` case-insensitively.

    Raises
    ------
    TargetNotFoundError
        If neither selector matches; carries the sorted available names.
    """
    if target_id and read_fragment(store, project_id, root_key(kind, target_id)):
        return target_id

    pattern = re.compile(
        rf"{re.escape(kind)}/{re.escape(ID_PREFIX)}({TARGET_ID_PREFIXES[kind]}\w+)"
    )
    wanted = name.casefold() if name else None
    available: list[str] = []
    for key in sorted(store.list_keys(project_id, f"{kind}/{ID_PREFIX}")):
        match = pattern.fullmatch(key)
        if match is None:
            continue
        text = read_fragment(store, project_id, key)
        if not text:
            continue
        name_line = NAME_LINE_PATTERN.search(text)
        declared = name_line.group(1).strip() if name_line else ""
        if wanted is not None and declared.casefold() == wanted:
            return match.group(1)
        if declared:
            available.append(declared)

    raise TargetNotFoundError(kind, name or target_id or "", tuple(sorted(available)))


__all__ = [
    "extract_component_meta",
    "extract_page_meta",
    "lookup_folder",
    "parse_folder_mapping",
    "parse_params",
    "parse_state_fields",
    "resolve_data_type",
    "resolve_target",
]
