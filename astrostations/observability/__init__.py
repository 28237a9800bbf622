"""Runtime observability primitives for astrostations modules."""

from __future__ import annotations

from .metrics import (
    COMPUTE_ERRORS,
    ORACLE_CACHE_HITS,
    ORACLE_EVALUATIONS,
    SEARCH_DURATION,
    ensure_metrics_registered,
)

__all__ = [
    "COMPUTE_ERRORS",
    "ORACLE_CACHE_HITS",
    "ORACLE_EVALUATIONS",
    "SEARCH_DURATION",
    "ensure_metrics_registered",
]
