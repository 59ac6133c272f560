"""Typed settings for the summary command line."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from ff_summary.store import DEFAULT_CACHE_DIR
from ff_summary.summary.assembler import DEFAULT_MAX_WORKERS


class SummaryConfigError(ValueError):
    """Raised when the summary configuration file holds invalid values."""


@dc.dataclass(slots=True)
class SummaryConfig:
    """Where fragments are cached and how hard to fan out over them."""

    cache_root: Path = DEFAULT_CACHE_DIR
    max_workers: int = DEFAULT_MAX_WORKERS
    project_id: str | None = None


__all__ = ["SummaryConfig", "SummaryConfigError"]
