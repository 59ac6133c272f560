"""Load and validate settings for the ff-summary command line.

The optional settings file is a small YAML mapping naming the fragment cache
directory, the worker pool size and a default project id. The primary entry
point is :func:`load_summary_config`, which returns a :class:`SummaryConfig`
with unspecified settings left at their defaults.

Examples
--------
>>> from pathlib import Path
>>> from ff_summary.config import load_summary_config
>>> config = load_summary_config(Path("ff-summary.yaml"))  # doctest: +SKIP
>>> config.cache_root  # doctest: +SKIP
PosixPath('.ff-cache')
"""

from .loader import load_summary_config
from .models import SummaryConfig, SummaryConfigError

__all__ = ["SummaryConfig", "SummaryConfigError", "load_summary_config"]
