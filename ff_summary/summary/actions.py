"""Summarise the event triggers attached to a widget node.

A node's triggers live under ``<node>/trigger_actions/id-<EVENT>``. Each
trigger document names its event and a ``rootAction`` graph that links action
ids through follow-up chains, two-way conditions and parallel sets. The action
bodies themselves are separate fragments under ``<trigger>/action/id-<id>``.

Resolution happens in three steps:

1. :func:`collect_action_keys` walks the graph and returns every reachable
   action id once, in first-seen order, with an explicit depth ceiling.
2. Each id is loaded; a missing body is dropped, an unparseable body becomes
   an ``unknown`` entry carrying the raw id.
3. :func:`classify_action` labels each body through :data:`ACTION_CLASSIFIERS`,
   an ordered table where the first matching key wins.

Terminal actions are never reported and a trigger left without actions is
omitted altogether.

Example
-------
>>> from ff_summary.summary.actions import classify_action, collect_action_keys
>>> collect_action_keys({"action": {"key": "K1"},
...                      "followUpAction": {"action": {"key": "K1"}}})
['K1']
>>> classify_action({"disableAction": {"actionNode": {"navigate": {"isNavigateBack": True}}}})
ActionSummary(kind='[DISABLED] navigate', detail='back')
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from ff_summary._constants import (
    ACTION_DEPTH_LIMIT,
    DEEP_ACTION_DEPTH_LIMIT,
    DISABLED_MARKER,
    ID_PREFIX,
    action_key,
    trigger_namespace,
)

from .fragments import as_list, as_mapping, load_fragment
from .models import ActionSummary, FragmentParseError, TriggerSummary
from .nodes import resolve_value

if typ.TYPE_CHECKING:
    from ff_summary.store import FragmentStore

logger = logging.getLogger(__name__)

TERMINATE_KIND = "terminate"
UNKNOWN_KIND = "unknown"
UNKNOWN_EVENT = "UNKNOWN"
FALLBACK_IGNORED_KEYS = frozenset({"key", "outputVariableName"})
POSTGRES_OPERATIONS = ("insert", "update", "query", "delete")

ActionDoc = cabc.Mapping[str, typ.Any]
Classifier = cabc.Callable[[ActionDoc, int], ActionSummary]


def collect_action_keys(
    root: ActionDoc, *, depth_limit: int = ACTION_DEPTH_LIMIT
) -> list[str]:
    """Return every action id reachable from ``root``, deduplicated.

    The walk visits, for each graph node: its own ``action.key``; the
    ``conditionActions`` true branches, false branch (unless it is a bare
    terminate marker) and post-condition follow-up; every
    ``parallelActions.actions`` branch; and finally the ``followUpAction``.
    Ids keep the position at which they were first reached.

    Parameters
    ----------
    root : Mapping[str, Any]
        The trigger's ``rootAction`` mapping.
    depth_limit : int, optional
        Graph nodes nested deeper than this are not expanded, which bounds the
        walk on self-referential or pathologically deep input.

    Returns
    -------
    list[str]
        Unique action ids in first-seen order.
    """
    keys: list[str] = []
    seen_keys: set[str] = set()
    visited: set[int] = set()
    stack: list[tuple[ActionDoc, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if depth > depth_limit or id(node) in visited:
            continue
        visited.add(id(node))

        action_id = as_mapping(node.get("action")).get("key")
        if isinstance(action_id, str | int) and not isinstance(action_id, bool):
            text = str(action_id)
            if text and text not in seen_keys:
                seen_keys.add(text)
                keys.append(text)

        # Pushed in reverse so the stack pops them in declared order.
        stack.extend((child, depth + 1) for child in reversed(_successors(node)))
    return keys


def _successors(node: ActionDoc) -> list[ActionDoc]:
    successors: list[ActionDoc] = []
    condition = as_mapping(node.get("conditionActions"))
    if condition:
        for branch in as_list(condition.get("trueActions")):
            true_action = as_mapping(branch).get("trueAction")
            if isinstance(true_action, dict):
                successors.append(true_action)
        false_action = condition.get("falseAction")
        if isinstance(false_action, dict) and "terminate" not in false_action:
            successors.append(false_action)
        follow_up = condition.get("followUpAction")
        if isinstance(follow_up, dict):
            successors.append(follow_up)

    parallel = as_mapping(node.get("parallelActions"))
    successors.extend(
        branch for branch in as_list(parallel.get("actions")) if isinstance(branch, dict)
    )

    follow_up = node.get("followUpAction")
    if isinstance(follow_up, dict):
        successors.append(follow_up)
    return successors


def _classify_navigate(doc: ActionDoc, _depth: int) -> ActionSummary:
    navigate = as_mapping(doc.get("navigate"))
    return ActionSummary("navigate", "back" if navigate.get("isNavigateBack") else "to page")


def _classify_custom_action(doc: ActionDoc, _depth: int) -> ActionSummary:
    identifier = as_mapping(as_mapping(doc.get("customAction")).get("customActionIdentifier"))
    detail = doc.get("outputVariableName") or identifier.get("key") or UNKNOWN_KIND
    return ActionSummary("customAction", str(detail))


def _classify_database(doc: ActionDoc, _depth: int) -> ActionSummary:
    database = as_mapping(doc.get("database"))
    postgres = database.get("postgresAction")
    if isinstance(postgres, dict):
        table = as_mapping(postgres.get("tableIdentifier")).get("name") or "table"
        operation = next((op for op in POSTGRES_OPERATIONS if op in postgres), "op")
        return ActionSummary("database", f"{operation} {table}")
    if isinstance(database.get("firestoreAction"), dict):
        return ActionSummary("database", "firestore")
    return ActionSummary("database")


def _classify_state_update(doc: ActionDoc, _depth: int) -> ActionSummary:
    update = as_mapping(doc.get("localStateUpdate"))
    if update.get("stateVariableType") == "APP_STATE":
        return ActionSummary("updateAppState")
    updates = as_list(update.get("updates"))
    first = as_mapping(updates[0]) if updates else {}
    if "increment" in first:
        return ActionSummary("updateState", "increment")
    if "dataStructUpdate" in first:
        return ActionSummary("updateState", "struct")
    return ActionSummary("updateState")


def _classify_wait(doc: ActionDoc, _depth: int) -> ActionSummary:
    duration = as_mapping(as_mapping(doc.get("waitAction")).get("durationMillisValue"))
    millis = duration.get("inputValue")
    return ActionSummary("wait", f"{millis}ms" if millis else "")


def _classify_revenue_cat(doc: ActionDoc, _depth: int) -> ActionSummary:
    revenue_cat = as_mapping(doc.get("revenueCat"))
    if "purchase" in revenue_cat:
        return ActionSummary("revenueCat", "purchase")
    if "restore" in revenue_cat:
        return ActionSummary("revenueCat", "restore")
    if "paywall" in revenue_cat:
        paywall = as_mapping(revenue_cat.get("paywall"))
        entitlement = resolve_value(paywall.get("entitlementId"))
        return ActionSummary("revenueCat", f"paywall ({entitlement})" if entitlement else "paywall")
    return ActionSummary("revenueCat")


def _classify_disabled(doc: ActionDoc, depth: int) -> ActionSummary:
    inner = as_mapping(as_mapping(doc.get("disableAction")).get("actionNode"))
    if not inner:
        return ActionSummary(DISABLED_MARKER)
    # An inner body with no recognised kind is labelled like an unwrapped one.
    found = find_deep_action(inner, depth + 1) or classify_action(inner, depth + 1)
    return ActionSummary(f"{DISABLED_MARKER} {found.kind}", found.detail)


def _labelled(kind: str) -> Classifier:
    def _classify(_doc: ActionDoc, _depth: int) -> ActionSummary:
        return ActionSummary(kind)

    return _classify


ACTION_CLASSIFIERS: list[tuple[str, Classifier]] = [
    ("navigate", _classify_navigate),
    ("customAction", _classify_custom_action),
    ("database", _classify_database),
    ("localStateUpdate", _classify_state_update),
    ("waitAction", _classify_wait),
    ("alertDialog", _labelled("alertDialog")),
    ("bottomSheet", _labelled("bottomSheet")),
    ("revenueCat", _classify_revenue_cat),
    ("auth", _labelled("auth")),
    ("rebuild", _labelled("rebuild")),
    ("scrollTo", _labelled("scrollTo")),
    ("copyToClipboard", _labelled("copyToClipboard")),
    ("share", _labelled("share")),
    ("hapticFeedback", _labelled("haptic")),
    ("terminate", _labelled(TERMINATE_KIND)),
    ("disableAction", _classify_disabled),
]
"""Recognised action keys in precedence order; append new kinds at the end."""


def _classify_known(doc: ActionDoc, depth: int) -> ActionSummary | None:
    for key, classifier in ACTION_CLASSIFIERS:
        if key in doc:
            return classifier(doc, depth)
    return None


def classify_action(doc: ActionDoc, depth: int = 0) -> ActionSummary:
    """Label an action body with its kind and a short detail.

    Unrecognised bodies fall back to their first key other than ``key`` and
    ``outputVariableName``; a body with no such key is ``unknown``.
    """
    summary = _classify_known(doc, depth)
    if summary is not None:
        return summary
    remaining = [str(key) for key in doc if key not in FALLBACK_IGNORED_KEYS]
    return ActionSummary(remaining[0] if remaining else UNKNOWN_KIND)


def find_deep_action(
    value: object, depth: int = 0, *, depth_limit: int = DEEP_ACTION_DEPTH_LIMIT
) -> ActionSummary | None:
    """Return the first recognisable action nested anywhere within ``value``.

    The search is depth-first over mapping values and gives up below
    ``depth_limit`` levels.
    """
    if not isinstance(value, dict) or depth > depth_limit:
        return None
    summary = _classify_known(value, depth)
    if summary is not None:
        return summary
    for child in value.values():
        found = find_deep_action(child, depth + 1, depth_limit=depth_limit)
        if found is not None:
            return found
    return None


def _trigger_keys(store: FragmentStore, project_id: str, namespace: str) -> list[str]:
    """Return direct trigger-definition keys under ``namespace``, sorted."""
    try:
        keys = store.list_keys(project_id, namespace)
    except OSError as exc:
        logger.warning("Could not list triggers under %s: %s", namespace, exc)
        return []
    direct: list[str] = []
    for key in keys:
        rest = key[len(namespace) :]
        if key.startswith(namespace) and rest.startswith(ID_PREFIX) and "/" not in rest:
            direct.append(key)
    return sorted(direct)


def _load_actions(
    store: FragmentStore, project_id: str, trigger_key: str, action_ids: list[str]
) -> list[ActionSummary]:
    actions: list[ActionSummary] = []
    for action_id in action_ids:
        key = action_key(trigger_key, action_id)
        try:
            document = load_fragment(store, project_id, key)
        except FragmentParseError as exc:
            logger.debug("Action fragment %s unparseable: %s", key, exc)
            actions.append(ActionSummary(UNKNOWN_KIND, action_id))
            continue
        if document is None:
            continue
        summary = classify_action(document)
        if summary.kind != TERMINATE_KIND:
            actions.append(summary)
    return actions


def summarize_trigger(
    store: FragmentStore, project_id: str, trigger_key: str
) -> TriggerSummary | None:
    """Resolve one trigger definition, or None when it yields no actions."""
    try:
        document = load_fragment(store, project_id, trigger_key)
    except FragmentParseError as exc:
        logger.debug("Trigger fragment %s unparseable: %s", trigger_key, exc)
        return None
    if document is None:
        return None
    root_action = document.get("rootAction")
    if not isinstance(root_action, dict):
        return None

    event_name = as_mapping(document.get("trigger")).get("triggerType") or UNKNOWN_EVENT
    action_ids = collect_action_keys(root_action)
    actions = _load_actions(store, project_id, trigger_key, action_ids)
    if not actions:
        return None
    return TriggerSummary(event_name=str(event_name), actions=tuple(actions))


def summarize_triggers(
    store: FragmentStore, project_id: str, node_path: str
) -> tuple[TriggerSummary, ...]:
    """Return the summarised triggers attached to the node stored at ``node_path``.

    Parameters
    ----------
    store : FragmentStore
        Source of fragments.
    project_id : str
        Project the node belongs to.
    node_path : str
        Fragment key of the node, e.g.
        ``page/id-Scaffold_x/page-widget-tree-outline/node/id-Button_y``.

    Returns
    -------
    tuple[TriggerSummary, ...]
        Triggers in event-key order; empty when the node has none.
    """
    namespace = trigger_namespace(node_path)
    summaries: list[TriggerSummary] = []
    for trigger_key in _trigger_keys(store, project_id, namespace):
        summary = summarize_trigger(store, project_id, trigger_key)
        if summary is not None:
            summaries.append(summary)
    return tuple(summaries)


__all__ = [
    "ACTION_CLASSIFIERS",
    "TERMINATE_KIND",
    "UNKNOWN_KIND",
    "classify_action",
    "collect_action_keys",
    "find_deep_action",
    "summarize_trigger",
    "summarize_triggers",
]
