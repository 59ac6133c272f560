"""Readable summaries of FlutterFlow pages and components from a local cache.

This package exposes the CLI entry points used by the ``ff-summary`` console
script together with the library functions behind them.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from ff_summary import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
