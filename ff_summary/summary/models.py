"""Typed dataclasses and exceptions shared by the summary pipeline."""

from __future__ import annotations

import dataclasses as dc


class SummaryError(RuntimeError):
    """Base class for failures that abort a whole summary."""


class StructureError(SummaryError, ValueError):
    """Raised when an outline document has no keyed top-level node."""


class FragmentParseError(SummaryError, ValueError):
    """Raised when fragment text is not a YAML mapping."""


class SummaryRequestError(SummaryError, ValueError):
    """Raised when a summary is requested without selecting a target."""


class OutlineMissingError(SummaryError):
    """Raised when a target exists but its widget tree outline is absent."""


class TargetNotFoundError(SummaryError, LookupError):
    """Raised when no page or component matches the requested selector.

    Attributes
    ----------
    kind : str
        ``"page"`` or ``"component"``.
    search_term : str
        The name or id that was looked up.
    available : tuple[str, ...]
        Sorted names of every target that does exist in the store.
    """

    def __init__(self, kind: str, search_term: str, available: tuple[str, ...]) -> None:
        self.kind = kind
        self.search_term = search_term
        self.available = available
        listing = "\n".join(f"  - {name}" for name in available)
        msg = (
            f'{kind.capitalize()} "{search_term}" not found in cache. '
            f"Available {kind}s:\n{listing}"
        )
        super().__init__(msg)


@dc.dataclass(frozen=True, slots=True)
class OutlineNode:
    """Structural skeleton of one widget: its id, slot and ordered children."""

    id: str
    slot: str
    children: tuple[OutlineNode, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class NodeRecord:
    """Detail resolved from a node's own fragment.

    Attributes
    ----------
    widget_type : str
        Declared widget type, or the prefix inferred from the node id.
    display_name : str
        Author-assigned widget name; empty when unnamed.
    render_detail : str
        Family-specific rendering hint such as a quoted label or file name.
    component_name : str | None
        Name of the referenced reusable component, when the lookup succeeded.
    component_id : str | None
        Id of the referenced reusable component, when declared.
    """

    widget_type: str
    display_name: str = ""
    render_detail: str = ""
    component_name: str | None = None
    component_id: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ActionSummary:
    """Classified label for a single action body."""

    kind: str
    detail: str = ""


@dc.dataclass(frozen=True, slots=True)
class TriggerSummary:
    """An event attached to a widget and the actions it runs."""

    event_name: str
    actions: tuple[ActionSummary, ...]


@dc.dataclass(frozen=True, slots=True)
class SummaryNode:
    """Outline node joined with its resolved record, triggers and children."""

    id: str
    slot: str
    widget_type: str
    display_name: str = ""
    render_detail: str = ""
    component_name: str | None = None
    component_id: str | None = None
    triggers: tuple[TriggerSummary, ...] = ()
    children: tuple[SummaryNode, ...] = ()

    @classmethod
    def join(
        cls,
        outline: OutlineNode,
        record: NodeRecord,
        triggers: tuple[TriggerSummary, ...],
        children: tuple[SummaryNode, ...],
    ) -> SummaryNode:
        """Combine an outline node with everything resolved for it."""
        return cls(
            id=outline.id,
            slot=outline.slot,
            widget_type=record.widget_type,
            display_name=record.display_name,
            render_detail=record.render_detail,
            component_name=record.component_name,
            component_id=record.component_id,
            triggers=triggers,
            children=children,
        )


@dc.dataclass(frozen=True, slots=True)
class ParamInfo:
    """A declared parameter (or state field) with its readable data type."""

    name: str
    data_type: str
    default_value: str | None = None


StateFieldInfo = ParamInfo


@dc.dataclass(frozen=True, slots=True)
class PageMeta:
    """Top-level metadata rendered in a page summary header."""

    name: str
    scaffold_id: str
    folder: str
    params: tuple[ParamInfo, ...] = ()
    state_fields: tuple[StateFieldInfo, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class ComponentMeta:
    """Top-level metadata rendered in a component summary header."""

    name: str
    container_id: str
    description: str = ""
    params: tuple[ParamInfo, ...] = ()


__all__ = [
    "ActionSummary",
    "ComponentMeta",
    "FragmentParseError",
    "NodeRecord",
    "OutlineMissingError",
    "OutlineNode",
    "PageMeta",
    "ParamInfo",
    "StateFieldInfo",
    "StructureError",
    "SummaryError",
    "SummaryNode",
    "SummaryRequestError",
    "TargetNotFoundError",
    "TriggerSummary",
]
