"""Cyclopts CLI entrypoint for summarising cached FlutterFlow projects.

The ``ff-summary`` console script defined here prints a readable report of a
page or reusable component straight from the local fragment cache written by
the project sync layer. It never talks to the network. Typical usage involves
running ``ff-summary page --project <id> --name HomePage`` after a sync to see
the widget tree together with the actions wired to each widget.

Every option can also be supplied through an ``FF_SUMMARY_*`` environment
variable, and an optional YAML settings file supplies defaults for the cache
directory, worker count and project id.

Examples
--------
Summarise a page by name:

>>> from ff_summary.cli import app
>>> app.run(["page", "--project", "demo", "--name", "HomePage"])  # doctest: +SKIP

Summarise a component by id with a custom cache directory:

>>> app.run(
...     ["component", "--project", "demo", "--component-id", "Container_card",
...      "--cache-root", "/tmp/ff-cache"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from .config import SummaryConfig, SummaryConfigError, load_summary_config
from .store import FileFragmentStore
from .summary import SummaryError, SummaryRequestError, summarize_component, summarize_page

LogLevel = typ.Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="ff-summary", config=cyclopts.config.Env("FF_SUMMARY_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(level: LogLevel) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def _resolve_settings(
    *,
    config: Path | None,
    project: str | None,
    cache_root: Path | None,
    max_workers: int | None,
) -> SummaryConfig:
    """Merge the optional settings file with explicit command-line overrides."""
    settings = load_summary_config(config) if config else SummaryConfig()
    if project:
        settings = dc.replace(settings, project_id=project)
    if cache_root:
        settings = dc.replace(settings, cache_root=cache_root)
    if max_workers is not None:
        if max_workers < 1:
            msg = f"max_workers must be a positive integer, got {max_workers}."
            raise SummaryConfigError(msg)
        settings = dc.replace(settings, max_workers=max_workers)
    return settings


def _open_store(settings: SummaryConfig) -> tuple[FileFragmentStore, str]:
    """Return the fragment store and project id, checking the cache exists."""
    if not settings.project_id:
        msg = "Provide a project id with --project or FF_SUMMARY_PROJECT."
        raise SummaryRequestError(msg)
    store = FileFragmentStore(settings.cache_root)
    if not store.has_project(settings.project_id):
        msg = (
            f'No cache found for project "{settings.project_id}" under '
            f"{settings.cache_root}. Sync the project first."
        )
        raise SummaryRequestError(msg)
    return store, settings.project_id


def _fail(exc: Exception) -> typ.NoReturn:
    print(str(exc), file=sys.stderr)
    raise SystemExit(1) from exc


@app.command(help="Summarise a page's widget tree, actions, params and state.")
def page(
    *,
    project: typ.Annotated[
        str | None, Parameter(help="Project id", env_var="FF_SUMMARY_PROJECT")
    ] = None,
    name: typ.Annotated[
        str | None, Parameter(help="Page name (case-insensitive)")
    ] = None,
    scaffold_id: typ.Annotated[
        str | None, Parameter(help="Scaffold id, e.g. Scaffold_home")
    ] = None,
    cache_root: typ.Annotated[
        Path | None,
        Parameter(help="Fragment cache directory", env_var="FF_SUMMARY_CACHE_ROOT"),
    ] = None,
    max_workers: typ.Annotated[
        int | None,
        Parameter(help="Concurrent fragment lookups", env_var="FF_SUMMARY_MAX_WORKERS"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to settings YAML", env_var="FF_SUMMARY_CONFIG"),
    ] = None,
    log_level: typ.Annotated[
        LogLevel, Parameter(help="Logging threshold", env_var="FF_SUMMARY_LOG_LEVEL")
    ] = "WARNING",
) -> None:
    """Print the summary report for one page.

    Parameters
    ----------
    project : str or None, optional
        Project id; falls back to the settings file.
    name : str or None, optional
        Page name to look up.
    scaffold_id : str or None, optional
        Scaffold id; preferred over ``name`` when both are given.
    cache_root : Path or None, optional
        Override the fragment cache directory.
    max_workers : int or None, optional
        Override the worker pool size.
    config : Path or None, optional
        Optional settings file supplying defaults.
    log_level : str, optional
        Threshold for diagnostic logging on stderr.

    Returns
    -------
    None
        The report is printed to stdout; failures print one message to stderr
        and exit with status 1.
    """
    _configure_logging(log_level)
    try:
        settings = _resolve_settings(
            config=config,
            project=project,
            cache_root=cache_root,
            max_workers=max_workers,
        )
        store, project_id = _open_store(settings)
        report = summarize_page(
            store,
            project_id,
            page_name=name,
            scaffold_id=scaffold_id,
            max_workers=settings.max_workers,
        )
    except (
        SummaryError, SummaryConfigError, FileNotFoundError, TypeError, YAMLError
    ) as exc:
        _fail(exc)
    print(report)


@app.command(help="Summarise a reusable component's widget tree and params.")
def component(
    *,
    project: typ.Annotated[
        str | None, Parameter(help="Project id", env_var="FF_SUMMARY_PROJECT")
    ] = None,
    name: typ.Annotated[
        str | None, Parameter(help="Component name (case-insensitive)")
    ] = None,
    component_id: typ.Annotated[
        str | None, Parameter(help="Component id, e.g. Container_card")
    ] = None,
    cache_root: typ.Annotated[
        Path | None,
        Parameter(help="Fragment cache directory", env_var="FF_SUMMARY_CACHE_ROOT"),
    ] = None,
    max_workers: typ.Annotated[
        int | None,
        Parameter(help="Concurrent fragment lookups", env_var="FF_SUMMARY_MAX_WORKERS"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to settings YAML", env_var="FF_SUMMARY_CONFIG"),
    ] = None,
    log_level: typ.Annotated[
        LogLevel, Parameter(help="Logging threshold", env_var="FF_SUMMARY_LOG_LEVEL")
    ] = "WARNING",
) -> None:
    """Print the summary report for one reusable component."""
    _configure_logging(log_level)
    try:
        settings = _resolve_settings(
            config=config,
            project=project,
            cache_root=cache_root,
            max_workers=max_workers,
        )
        store, project_id = _open_store(settings)
        report = summarize_component(
            store,
            project_id,
            component_name=name,
            component_id=component_id,
            max_workers=settings.max_workers,
        )
    except (
        SummaryError, SummaryConfigError, FileNotFoundError, TypeError, YAMLError
    ) as exc:
        _fail(exc)
    print(report)


def main() -> None:
    """Invoke the Cyclopts application behind the ``ff-summary`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
