"""Build readable summaries of FlutterFlow pages and components.

This subpackage reads the fragments mirrored by the project sync layer, parses
a page or component's widget tree outline, resolves per-node detail and event
triggers concurrently, and renders the result as one plain-text report. The
primary entry points are :func:`summarize_page` and
:func:`summarize_component`.

Examples
--------
>>> from pathlib import Path
>>> from ff_summary.store import FileFragmentStore
>>> from ff_summary.summary import summarize_page
>>> store = FileFragmentStore(Path(".ff-cache"))
>>> print(summarize_page(store, "my-project", page_name="HomePage"))  # doctest: +SKIP
HomePage (Scaffold_home) — folder: Main
<BLANKLINE>
Widget Tree:
└── [body] Column
"""

from .actions import classify_action, collect_action_keys, find_deep_action, summarize_triggers
from .assembler import DEFAULT_MAX_WORKERS, assemble_tree
from .fragments import parse_fragment
from .metadata import (
    extract_component_meta,
    extract_page_meta,
    parse_folder_mapping,
    resolve_data_type,
    resolve_target,
)
from .models import (
    ActionSummary,
    ComponentMeta,
    FragmentParseError,
    NodeRecord,
    OutlineMissingError,
    OutlineNode,
    PageMeta,
    ParamInfo,
    StateFieldInfo,
    StructureError,
    SummaryError,
    SummaryNode,
    SummaryRequestError,
    TargetNotFoundError,
    TriggerSummary,
)
from .nodes import resolve_node_record, resolve_value
from .outline import iter_outline, parse_outline
from .renderer import render_component_summary, render_page_summary
from .service import summarize_component, summarize_page

__all__ = [
    "DEFAULT_MAX_WORKERS",
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
    "assemble_tree",
    "classify_action",
    "collect_action_keys",
    "extract_component_meta",
    "extract_page_meta",
    "find_deep_action",
    "iter_outline",
    "parse_folder_mapping",
    "parse_fragment",
    "parse_outline",
    "render_component_summary",
    "render_page_summary",
    "resolve_data_type",
    "resolve_node_record",
    "resolve_target",
    "resolve_value",
    "summarize_component",
    "summarize_page",
    "summarize_triggers",
]
