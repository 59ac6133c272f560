"""Entry points that produce a complete page or component report."""

from __future__ import annotations

import logging
import typing as typ

from ff_summary._constants import COMPONENT_KIND, PAGE_KIND, outline_key, root_key

from .assembler import DEFAULT_MAX_WORKERS, assemble_tree
from .fragments import load_fragment
from .metadata import (
    extract_component_meta,
    extract_page_meta,
    lookup_folder,
    resolve_target,
)
from .models import OutlineMissingError, SummaryNode, SummaryRequestError
from .outline import parse_outline
from .renderer import render_component_summary, render_page_summary

if typ.TYPE_CHECKING:
    from ff_summary.store import FragmentStore

logger = logging.getLogger(__name__)


def _build_tree(
    store: FragmentStore,
    project_id: str,
    kind: str,
    target_id: str,
    display_name: str,
    max_workers: int,
) -> SummaryNode:
    tree_namespace = outline_key(root_key(kind, target_id), kind)
    document = load_fragment(store, project_id, tree_namespace)
    if document is None:
        msg = (
            f'{kind.capitalize()} "{display_name}" found but widget tree outline '
            "is not cached. Re-sync the project to fetch all sub-files."
        )
        raise OutlineMissingError(msg)
    outline = parse_outline(document)
    return assemble_tree(
        store, project_id, tree_namespace, outline, max_workers=max_workers
    )


def summarize_page(
    store: FragmentStore,
    project_id: str,
    *,
    page_name: str | None = None,
    scaffold_id: str | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> str:
    """Return the text report for one page.

    Parameters
    ----------
    store : FragmentStore
        Source of fragments.
    project_id : str
        Project holding the page.
    page_name : str | None, optional
        Page name, matched case-insensitively.
    scaffold_id : str | None, optional
        Scaffold id such as ``Scaffold_home``; preferred over ``page_name``.
    max_workers : int, optional
        Upper bound on concurrent fragment lookups.

    Returns
    -------
    str
        The rendered report.

    Raises
    ------
    SummaryRequestError
        If neither selector is given.
    TargetNotFoundError
        If no page matches.
    OutlineMissingError
        If the page has no cached widget tree outline.
    FragmentParseError
        If the page or outline document cannot be parsed.
    StructureError
        If the outline has no keyed root node.
    """
    if not page_name and not scaffold_id:
        msg = "Provide either a page name or a scaffold id."
        raise SummaryRequestError(msg)
    resolved_id = resolve_target(
        store, project_id, PAGE_KIND, name=page_name, target_id=scaffold_id
    )
    logger.info("Summarising page %s of project %s", resolved_id, project_id)
    meta = extract_page_meta(
        load_fragment(store, project_id, root_key(PAGE_KIND, resolved_id)),
        resolved_id,
        lookup_folder(store, project_id, resolved_id),
    )
    tree = _build_tree(
        store, project_id, PAGE_KIND, resolved_id, meta.name, max_workers
    )
    return render_page_summary(meta, tree)


def summarize_component(
    store: FragmentStore,
    project_id: str,
    *,
    component_name: str | None = None,
    component_id: str | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> str:
    """Return the text report for one reusable component.

    Mirrors :func:`summarize_page` with ``Container_*`` ids and without a
    folder or state fields.
    """
    if not component_name and not component_id:
        msg = "Provide either a component name or a component id."
        raise SummaryRequestError(msg)
    resolved_id = resolve_target(
        store, project_id, COMPONENT_KIND, name=component_name, target_id=component_id
    )
    logger.info("Summarising component %s of project %s", resolved_id, project_id)
    meta = extract_component_meta(
        load_fragment(store, project_id, root_key(COMPONENT_KIND, resolved_id)),
        resolved_id,
    )
    tree = _build_tree(
        store, project_id, COMPONENT_KIND, resolved_id, meta.name, max_workers
    )
    return render_component_summary(meta, tree)


__all__ = ["summarize_component", "summarize_page"]
