"""Render summary trees as plain text reports.

A report is a short header followed by a box-drawing view of the widget tree::

    HomePage (Scaffold_home) — folder: Main
    Params: userId (String)

    ON_PAGE_LOAD → [customAction: fetchUser]

    Widget Tree:
    ├── [appBar] AppBar
    └── [body] Column
        └── Button "Go" → ON_TAP → [navigate: to page]

Rendering is a pure function of its inputs, so equal inputs always produce
byte-identical reports.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ff_summary._constants import CHILDREN_SLOT, ROOT_SLOT

if typ.TYPE_CHECKING:
    from .models import (
        ActionSummary,
        ComponentMeta,
        PageMeta,
        ParamInfo,
        SummaryNode,
        TriggerSummary,
    )

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
BLANK_PREFIX = "    "
TRIGGER_ARROW = " → "
TREE_HEADING = "Widget Tree:"
UNLABELLED_SLOTS = frozenset({CHILDREN_SLOT, ROOT_SLOT})


def format_action(action: ActionSummary) -> str:
    """Return ``kind: detail``, or the bare kind when there is no detail."""
    return f"{action.kind}: {action.detail}" if action.detail else action.kind


def format_trigger(trigger: TriggerSummary) -> str:
    """Return ``EVENT → [action, ...]``."""
    actions = ", ".join(format_action(action) for action in trigger.actions)
    return f"{trigger.event_name}{TRIGGER_ARROW}[{actions}]"


def format_params(label: str, params: cabc.Sequence[ParamInfo]) -> str | None:
    """Return a ``Params:``/``State:`` line, or None when ``params`` is empty."""
    if not params:
        return None
    entries = []
    for param in params:
        default = f", default: {param.default_value}" if param.default_value else ""
        entries.append(f"{param.name} ({param.data_type}{default})")
    return f"{label}: {', '.join(entries)}"


def node_label(node: SummaryNode) -> str:
    """Return the one-line label of ``node`` without connector or triggers."""
    parts: list[str] = []
    if node.slot not in UNLABELLED_SLOTS:
        parts.append(f"[{node.slot}] ")
    if node.component_name:
        parts.append(f"[{node.component_name}]")
        if node.component_id:
            parts.append(f" ({node.component_id})")
    else:
        parts.append(node.widget_type)
    if node.display_name:
        parts.append(f" ({node.display_name})")
    if node.render_detail:
        parts.append(f" {node.render_detail}")
    return "".join(parts)


def render_tree_lines(root: SummaryNode) -> list[str]:
    """Return box-drawing lines for every descendant of ``root``.

    The root itself is not rendered; its children start at column zero.
    """
    lines: list[str] = []
    _render_children(root.children, "", lines)
    return lines


def _render_children(
    children: cabc.Sequence[SummaryNode], prefix: str, lines: list[str]
) -> None:
    for index, child in enumerate(children):
        is_last = index == len(children) - 1
        connector = LAST_BRANCH if is_last else BRANCH
        triggers = ""
        if child.triggers:
            triggers = TRIGGER_ARROW + "; ".join(
                format_trigger(trigger) for trigger in child.triggers
            )
        lines.append(f"{prefix}{connector}{node_label(child)}{triggers}")
        _render_children(
            child.children, prefix + (BLANK_PREFIX if is_last else PIPE_PREFIX), lines
        )


def _render_body(header: list[str], tree: SummaryNode) -> str:
    lines = list(header)
    if tree.triggers:
        lines.append("")
        lines.extend(format_trigger(trigger) for trigger in tree.triggers)
    lines.append("")
    lines.append(TREE_HEADING)
    lines.extend(render_tree_lines(tree))
    return "\n".join(lines)


def render_page_summary(meta: PageMeta, tree: SummaryNode) -> str:
    """Render the full text report for a page.

    Parameters
    ----------
    meta : PageMeta
        Header metadata of the page.
    tree : SummaryNode
        Assembled tree rooted at the page scaffold.

    Returns
    -------
    str
        Newline-joined report without a trailing newline.
    """
    header = [f"{meta.name} ({meta.scaffold_id}) — folder: {meta.folder}"]
    for line in (
        format_params("Params", meta.params),
        format_params("State", meta.state_fields),
    ):
        if line is not None:
            header.append(line)
    return _render_body(header, tree)


def render_component_summary(meta: ComponentMeta, tree: SummaryNode) -> str:
    """Render the full text report for a reusable component."""
    header = [f"{meta.name} ({meta.container_id})"]
    if meta.description:
        header.append(f"Description: {meta.description}")
    params = format_params("Params", meta.params)
    if params is not None:
        header.append(params)
    return _render_body(header, tree)


__all__ = [
    "format_action",
    "format_params",
    "format_trigger",
    "node_label",
    "render_component_summary",
    "render_page_summary",
    "render_tree_lines",
]
