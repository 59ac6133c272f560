"""Parse a widget tree outline into an :class:`OutlineNode` skeleton.

The outline document has a ``node`` root. Each node carries a ``key`` and may
hold child nodes under ten named slots (``body``, ``appBar`` ...) and under a
positional ``children`` list. Named slots are always emitted first, in the
fixed order of :data:`ff_summary._constants.NAMED_SLOTS`, whatever order the
source document lists them in.

Example
-------
>>> from ff_summary.summary.outline import parse_outline
>>> root = parse_outline({"node": {"key": "Scaffold_x", "children": [{"key": "Text_a"}],
...                               "body": {"key": "Column_b"}}})
>>> [(child.id, child.slot) for child in root.children]
[('Column_b', 'body'), ('Text_a', 'children')]
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from ff_summary._constants import (
    CHILDREN_SLOT,
    NAMED_SLOTS,
    OUTLINE_DEPTH_LIMIT,
    ROOT_SLOT,
)

from .fragments import as_list
from .models import OutlineNode, StructureError

logger = logging.getLogger(__name__)

UNKNOWN_NODE_ID = "unknown"


def parse_outline(
    document: cabc.Mapping[str, typ.Any], *, depth_limit: int = OUTLINE_DEPTH_LIMIT
) -> OutlineNode:
    """Return the outline tree rooted at the document's ``node`` entry.

    Parameters
    ----------
    document : Mapping[str, Any]
        Parsed outline document.
    depth_limit : int, optional
        Nesting depth past which subtrees are dropped.

    Returns
    -------
    OutlineNode
        Root node with ``slot="root"``.

    Raises
    ------
    StructureError
        If the document has no ``node`` mapping or the root node has no key.
    """
    root = document.get("node")
    if not isinstance(root, dict) or not root.get("key"):
        msg = "Invalid tree outline: missing root node"
        raise StructureError(msg)
    return _parse_node(root, ROOT_SLOT, 0, depth_limit)


def _parse_node(
    raw: cabc.Mapping[str, typ.Any], slot: str, depth: int, depth_limit: int
) -> OutlineNode:
    node_id = raw.get("key")
    node_id = str(node_id) if node_id else UNKNOWN_NODE_ID
    if depth >= depth_limit:
        logger.debug("Outline depth limit reached at %s; children dropped", node_id)
        return OutlineNode(id=node_id, slot=slot)

    children: list[OutlineNode] = []
    for name in NAMED_SLOTS:
        child = raw.get(name)
        if isinstance(child, dict) and child.get("key"):
            children.append(_parse_node(child, name, depth + 1, depth_limit))

    for child in as_list(raw.get(CHILDREN_SLOT)):
        if isinstance(child, dict):
            children.append(_parse_node(child, CHILDREN_SLOT, depth + 1, depth_limit))
        else:
            children.append(OutlineNode(id=UNKNOWN_NODE_ID, slot=CHILDREN_SLOT))

    return OutlineNode(id=node_id, slot=slot, children=tuple(children))


def iter_outline(root: OutlineNode) -> cabc.Iterator[OutlineNode]:
    """Yield ``root`` and every descendant in depth-first, declared order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


__all__ = ["UNKNOWN_NODE_ID", "iter_outline", "parse_outline"]
