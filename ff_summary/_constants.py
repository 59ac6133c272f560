"""Fragment key layout and other literals shared across ff_summary.

Every fragment key the package reads is built by the helpers below so that the
layout agreed with the sync layer lives in exactly one place. Intended for
internal use within the ff_summary package.

Examples
--------
>>> from ff_summary import _constants
>>> _constants.root_key("page", "Scaffold_home")
'page/id-Scaffold_home'
>>> _constants.outline_key("page/id-Scaffold_home", "page")
'page/id-Scaffold_home/page-widget-tree-outline'
>>> _constants.node_key("page/id-Scaffold_home/page-widget-tree-outline", "Text_a1")
'page/id-Scaffold_home/page-widget-tree-outline/node/id-Text_a1'
"""

from __future__ import annotations

PAGE_KIND = "page"
COMPONENT_KIND = "component"
FOLDERS_KEY = "folders"

ID_PREFIX = "id-"
NODE_SEGMENT = "node"
TRIGGER_SEGMENT = "trigger_actions"
ACTION_SEGMENT = "action"
OUTLINE_SUFFIX = "-widget-tree-outline"

ROOT_SLOT = "root"
CHILDREN_SLOT = "children"
NAMED_SLOTS: tuple[str, ...] = (
    "body",
    "appBar",
    "title",
    "header",
    "collapsed",
    "expanded",
    "floatingActionButton",
    "drawer",
    "endDrawer",
    "bottomNavigationBar",
)
"""Named child slots in the order they are emitted, ahead of ``children``."""

DISABLED_MARKER = "[DISABLED]"
DYNAMIC_MARKER = "[dynamic]"
THEME_MARKER_TEMPLATE = "[theme:{name}]"
UNMAPPED_FOLDER = "(unmapped)"

ACTION_DEPTH_LIMIT = 12
DEEP_ACTION_DEPTH_LIMIT = 8
OUTLINE_DEPTH_LIMIT = 64


def root_key(kind: str, container_id: str) -> str:
    """Return the key of a page or component's top-level document."""
    return f"{kind}/{ID_PREFIX}{container_id}"


def outline_key(root: str, kind: str) -> str:
    """Return the key of the widget tree outline stored beneath ``root``."""
    return f"{root}/{kind}{OUTLINE_SUFFIX}"


def node_key(tree_namespace: str, node_id: str) -> str:
    """Return the key of a single node fragment within a widget tree."""
    return f"{tree_namespace}/{NODE_SEGMENT}/{ID_PREFIX}{node_id}"


def trigger_namespace(node_path: str) -> str:
    """Return the listing prefix under which a node's triggers are stored."""
    return f"{node_path}/{TRIGGER_SEGMENT}/"


def action_key(trigger_path: str, action_id: str) -> str:
    """Return the key of one action body belonging to a trigger."""
    return f"{trigger_path}/{ACTION_SEGMENT}/{ID_PREFIX}{action_id}"


def component_definition_key(component_id: str) -> str:
    """Return the key of a reusable component's top-level document."""
    return root_key(COMPONENT_KIND, component_id)


__all__ = [
    "ACTION_DEPTH_LIMIT",
    "ACTION_SEGMENT",
    "CHILDREN_SLOT",
    "COMPONENT_KIND",
    "DEEP_ACTION_DEPTH_LIMIT",
    "DISABLED_MARKER",
    "DYNAMIC_MARKER",
    "FOLDERS_KEY",
    "ID_PREFIX",
    "NAMED_SLOTS",
    "NODE_SEGMENT",
    "OUTLINE_DEPTH_LIMIT",
    "OUTLINE_SUFFIX",
    "PAGE_KIND",
    "ROOT_SLOT",
    "THEME_MARKER_TEMPLATE",
    "TRIGGER_SEGMENT",
    "UNMAPPED_FOLDER",
    "action_key",
    "component_definition_key",
    "node_key",
    "outline_key",
    "root_key",
    "trigger_namespace",
]
