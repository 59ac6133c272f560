"""Join an outline with per-node detail and triggers into a summary tree.

Every outline node needs two independent lookups: its node record and its
triggers. Both are submitted for the whole tree to one thread pool before
anything is awaited, then the results are collected by walking the outline
again. Worker threads never wait on each other, and sibling order comes from
the outline rather than from completion order.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from concurrent.futures import Future, ThreadPoolExecutor

from ff_summary._constants import node_key

from .actions import summarize_triggers
from .models import NodeRecord, OutlineNode, SummaryNode, TriggerSummary
from .nodes import resolve_node_record
from .outline import iter_outline

if typ.TYPE_CHECKING:
    from ff_summary.store import FragmentStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def assemble_tree(
    store: FragmentStore,
    project_id: str,
    tree_namespace: str,
    outline_root: OutlineNode,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> SummaryNode:
    """Resolve every node of ``outline_root`` and return the joined tree.

    Parameters
    ----------
    store : FragmentStore
        Source of fragments.
    project_id : str
        Project the widget tree belongs to.
    tree_namespace : str
        Key of the outline document, e.g.
        ``page/id-Scaffold_x/page-widget-tree-outline``.
    outline_root : OutlineNode
        Root returned by :func:`~ff_summary.summary.outline.parse_outline`.
    max_workers : int, optional
        Upper bound on concurrent fragment lookups.

    Returns
    -------
    SummaryNode
        Root of the summary tree, children in outline order.
    """
    nodes = list(iter_outline(outline_root))
    logger.debug(
        "Resolving %d nodes under %s with %d workers",
        len(nodes),
        tree_namespace,
        max_workers,
    )
    with ThreadPoolExecutor(
        max_workers=max_workers, thread_name_prefix="ff-summary"
    ) as executor:
        records = {
            id(node): executor.submit(
                resolve_node_record, store, project_id, tree_namespace, node.id
            )
            for node in nodes
        }
        triggers = {
            id(node): executor.submit(
                summarize_triggers,
                store,
                project_id,
                node_key(tree_namespace, node.id),
            )
            for node in nodes
        }
        return _join(outline_root, records, triggers)


def _join(
    node: OutlineNode,
    records: cabc.Mapping[int, Future[NodeRecord]],
    triggers: cabc.Mapping[int, Future[tuple[TriggerSummary, ...]]],
) -> SummaryNode:
    children = tuple(_join(child, records, triggers) for child in node.children)
    return SummaryNode.join(
        node,
        records[id(node)].result(),
        triggers[id(node)].result(),
        children,
    )


__all__ = ["DEFAULT_MAX_WORKERS", "assemble_tree"]
