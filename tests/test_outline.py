"""Unit tests for widget tree outline parsing."""

from __future__ import annotations

from textwrap import dedent

import pytest

from ff_summary.summary.fragments import parse_fragment
from ff_summary.summary.models import OutlineNode, StructureError
from ff_summary.summary.outline import iter_outline, parse_outline


def test_bare_root_has_no_children() -> None:
    """A root with only a key parses to a childless root node."""
    root = parse_outline({"node": {"key": "Scaffold_x"}})

    assert root == OutlineNode(id="Scaffold_x", slot="root", children=()), (
        f"expected bare root node, got {root!r}"
    )


def test_named_slot_precedes_positional_children() -> None:
    """A ``body`` slot is emitted before entries of the ``children`` list."""
    document = parse_fragment(
        dedent(
            """
            node:
              key: Scaffold_x
              children:
                - key: Button_b
              body:
                key: Column_a
            """
        )
    )

    root = parse_outline(document)
    pairs = [(child.id, child.slot) for child in root.children]

    assert pairs == [("Column_a", "body"), ("Button_b", "children")], (
        f"expected body before children, got {pairs!r}"
    )


def test_named_slots_follow_fixed_priority() -> None:
    """Slot order is fixed whatever order the source document lists them in."""
    document = {
        "node": {
            "key": "Scaffold_x",
            "bottomNavigationBar": {"key": "NavBar_n"},
            "floatingActionButton": {"key": "Button_f"},
            "drawer": {"key": "Drawer_d"},
            "appBar": {"key": "AppBar_a"},
            "body": {"key": "Column_b"},
        }
    }

    slots = [child.slot for child in parse_outline(document).children]

    assert slots == [
        "body",
        "appBar",
        "floatingActionButton",
        "drawer",
        "bottomNavigationBar",
    ], f"unexpected slot order {slots!r}"


def test_slot_without_key_is_skipped() -> None:
    """A named slot present without an id contributes no child."""
    document = {"node": {"key": "Scaffold_x", "appBar": {"title": "x"}, "body": {"key": "Column_b"}}}

    ids = [child.id for child in parse_outline(document).children]

    assert ids == ["Column_b"], f"expected keyless appBar to be skipped, got {ids!r}"


def test_positional_child_without_key_is_unknown() -> None:
    """Below the root a missing id degrades to ``unknown`` instead of failing."""
    document = {"node": {"key": "Scaffold_x", "children": [{"children": [{"key": "Text_t"}]}]}}

    child = parse_outline(document).children[0]

    assert child.id == "unknown", f"expected unknown id, got {child.id!r}"
    assert child.children[0].id == "Text_t", "expected grandchild to survive"


@pytest.mark.parametrize(
    "document",
    [
        {},
        {"node": None},
        {"node": {"children": [{"key": "Text_t"}]}},
        {"node": "Scaffold_x"},
    ],
)
def test_missing_root_raises_structure_error(document: dict[str, object]) -> None:
    """An outline without a keyed root node cannot be summarised."""
    with pytest.raises(StructureError, match="missing root node"):
        parse_outline(document)


def test_depth_limit_drops_deeper_subtrees() -> None:
    """Nodes nested past the depth limit are kept but lose their children."""
    document = {
        "node": {
            "key": "Scaffold_x",
            "body": {"key": "Column_a", "children": [{"key": "Text_deep"}]},
        }
    }

    root = parse_outline(document, depth_limit=1)
    body = root.children[0]

    assert body.id == "Column_a", f"expected body to remain, got {body.id!r}"
    assert body.children == (), f"expected children dropped, got {body.children!r}"


def test_iter_outline_walks_depth_first_in_declared_order() -> None:
    """Iteration yields each node before its children, siblings in order."""
    document = {
        "node": {
            "key": "Scaffold_x",
            "body": {"key": "Column_a", "children": [{"key": "Text_1"}, {"key": "Text_2"}]},
            "children": [{"key": "Button_b"}],
        }
    }

    ids = [node.id for node in iter_outline(parse_outline(document))]

    assert ids == ["Scaffold_x", "Column_a", "Text_1", "Text_2", "Button_b"], (
        f"unexpected traversal order {ids!r}"
    )
