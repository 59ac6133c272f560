"""Unit tests for node detail resolution."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from ff_summary.store import MemoryFragmentStore
from ff_summary.summary.models import NodeRecord
from ff_summary.summary.nodes import (
    extract_detail,
    infer_type_from_id,
    resolve_node_record,
    resolve_value,
)

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

PROJECT = "demo"
TREE = "page/id-Scaffold_x/page-widget-tree-outline"


def _node_store(node_id: str, text: str, **extra: str) -> MemoryFragmentStore:
    fragments = {f"{TREE}/node/id-{node_id}": dedent(text)}
    fragments.update({key: dedent(value) for key, value in extra.items()})
    return MemoryFragmentStore({PROJECT: fragments})


@pytest.mark.parametrize(
    ("node_id", "expected"),
    [
        ("Button_77xk", "Button"),
        ("IconButton_a1", "IconButton"),
        ("lowercase_a1", "Unknown"),
        ("NoUnderscore", "Unknown"),
        ("", "Unknown"),
    ],
)
def test_infer_type_from_id(node_id: str, expected: str) -> None:
    """The widget type is the leading UpperCamel segment of the id."""
    assert infer_type_from_id(node_id) == expected, (
        f"expected {expected!r} for {node_id!r}"
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Hello", "Hello"),
        (42, "42"),
        ({"inputValue": "Hello"}, "Hello"),
        ({"inputValue": {"serializedValue": "Saved"}}, "Saved"),
        ({"inputValue": {"themeColor": "primary"}}, "[theme:primary]"),
        ({"variable": {"source": "WIDGET_STATE"}}, "[dynamic]"),
        ({"mostRecentInputValue": "x"}, ""),
        (None, ""),
        (True, ""),
    ],
)
def test_resolve_value_shapes(value: object, expected: str) -> None:
    """Literal, themed and data-bound values share one resolution rule."""
    assert resolve_value(value) == expected, f"expected {expected!r} for {value!r}"


def test_missing_node_fragment_degrades_to_inferred_type() -> None:
    """Without a node fragment only the id-derived type is known."""
    record = resolve_node_record(MemoryFragmentStore({PROJECT: {}}), PROJECT, TREE, "Button_77xk")

    assert record == NodeRecord(widget_type="Button"), (
        f"expected degraded Button record, got {record!r}"
    )


def test_unparseable_node_fragment_degrades() -> None:
    """A malformed node fragment is treated like a missing one."""
    store = _node_store("Text_a1", "type: [unclosed\n")

    record = resolve_node_record(store, PROJECT, TREE, "Text_a1")

    assert record == NodeRecord(widget_type="Text"), (
        f"expected degraded Text record, got {record!r}"
    )


def test_store_read_failure_degrades(mocker: MockerFixture) -> None:
    """An I/O failure while reading a node is absorbed into the fallback."""
    store = mocker.Mock()
    store.read.side_effect = PermissionError("denied")

    record = resolve_node_record(store, PROJECT, TREE, "Image_p1")

    assert record.widget_type == "Image", f"expected Image, got {record.widget_type!r}"
    store.read.assert_called_once_with(PROJECT, f"{TREE}/node/id-Image_p1")


def test_undecodable_node_fragment_degrades(mocker: MockerFixture) -> None:
    """A fragment whose bytes are not UTF-8 is treated like a malformed one."""
    store = mocker.Mock()
    store.read.side_effect = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    record = resolve_node_record(store, PROJECT, TREE, "Text_a1")

    assert record == NodeRecord(widget_type="Text"), (
        f"expected degraded Text record, got {record!r}"
    )


def test_text_node_resolves_name_and_quoted_text() -> None:
    """A text node reports its declared name and quoted literal text."""
    store = _node_store(
        "Text_a1",
        """
        type: Text
        name: Headline
        props:
          text:
            textValue:
              inputValue: Welcome back
        """,
    )

    record = resolve_node_record(store, PROJECT, TREE, "Text_a1")

    assert record == NodeRecord(
        widget_type="Text", display_name="Headline", render_detail='"Welcome back"'
    ), f"unexpected record {record!r}"


def test_button_label_bound_to_variable_is_dynamic() -> None:
    """A data-bound button label renders as the dynamic marker."""
    store = _node_store(
        "Button_b1",
        """
        type: Button
        props:
          button:
            text:
              textValue:
                variable:
                  source: PAGE_STATE
        """,
    )

    record = resolve_node_record(store, PROJECT, TREE, "Button_b1")

    assert record.render_detail == '"[dynamic]"', (
        f"expected quoted dynamic marker, got {record.render_detail!r}"
    )


@pytest.mark.parametrize(
    ("widget_type", "props", "expected"),
    [
        (
            "Image",
            {
                "image": {
                    "pathValue": {"inputValue": "assets/images/logo.png"},
                    "dimensions": {
                        "width": {"pixelsValue": {"inputValue": 120}},
                        "height": {"pixelsValue": {"inputValue": 40}},
                    },
                }
            },
            "logo.png [120x40]",
        ),
        (
            "Image",
            {
                "image": {
                    "pathValue": {"variable": {"source": "FUNCTION_CALL"}},
                    "dimensions": {
                        "width": {"pixelsValue": {"inputValue": "Infinity"}},
                        "height": {"pixelsValue": {"inputValue": 200}},
                    },
                }
            },
            "[dynamic]",
        ),
        (
            "Icon",
            {"icon": {"iconDataValue": {"inputValue": {"name": "favorite"}}}},
            "favorite",
        ),
        (
            "TextField",
            {
                "textField": {
                    "inputDecoration": {
                        "hintText": {"textValue": {"inputValue": "Email"}}
                    }
                }
            },
            'hint: "Email"',
        ),
        (
            "Switch",
            {"switchWidget": {"labelValue": {"inputValue": "Notifications"}}},
            "Notifications",
        ),
        ("Checkbox", {"checkbox": {}}, ""),
        ("Column", {"column": {"mainAxisSize": "MIN"}}, ""),
        ("Text", {}, ""),
    ],
)
def test_extract_detail_by_family(
    widget_type: str, props: dict[str, object], expected: str
) -> None:
    """Each widget family reads its own props shape; others yield nothing."""
    assert extract_detail(widget_type, props) == expected, (
        f"expected {expected!r} for {widget_type}"
    )


def test_component_instance_resolves_definition_name() -> None:
    """A component reference is looked up to recover the component name."""
    store = _node_store(
        "Container_inst",
        """
        type: Container
        componentClassKeyRef:
          key: Container_card
        """,
        **{"component/id-Container_card": "name: ProductCard\ndescription: Card\n"},
    )

    record = resolve_node_record(store, PROJECT, TREE, "Container_inst")

    assert record.component_id == "Container_card", (
        f"expected component id, got {record.component_id!r}"
    )
    assert record.component_name == "ProductCard", (
        f"expected component name, got {record.component_name!r}"
    )


def test_component_lookup_failure_keeps_id_only() -> None:
    """When the definition is missing the id is kept and the name omitted."""
    store = _node_store(
        "Container_inst",
        """
        type: Container
        componentClassKeyRef:
          key: Container_gone
        """,
    )

    record = resolve_node_record(store, PROJECT, TREE, "Container_inst")

    assert record.component_id == "Container_gone", "expected id to be kept"
    assert record.component_name is None, (
        f"expected no component name, got {record.component_name!r}"
    )
