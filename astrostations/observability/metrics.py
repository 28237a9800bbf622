"""Prometheus metric definitions shared across astrostations components."""

from __future__ import annotations

from collections.abc import Iterable

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

__all__ = [
    "COMPUTE_ERRORS",
    "ORACLE_CACHE_HITS",
    "ORACLE_EVALUATIONS",
    "SEARCH_DURATION",
    "ensure_metrics_registered",
]


ORACLE_EVALUATIONS = Counter(
    "astrostations_oracle_evaluations_total",
    "Total apparent longitude evaluations issued to longitude oracles.",
    ("oracle", "body"),
    registry=None,
)

ORACLE_CACHE_HITS = Counter(
    "astrostations_oracle_cache_hits_total",
    "Total apparent longitude lookups served from the memoising oracle.",
    ("oracle",),
    registry=None,
)

SEARCH_DURATION = Histogram(
    "astrostations_search_duration_seconds",
    "Duration of moment and station searches.",
    ("operation",),
    registry=None,
)

COMPUTE_ERRORS = Counter(
    "astrostations_compute_errors_total",
    "Count of runtime failures raised by longitude oracles.",
    ("component", "error"),
    registry=None,
)


def _iter_metrics() -> Iterable[Counter | Histogram]:
    yield ORACLE_EVALUATIONS
    yield ORACLE_CACHE_HITS
    yield SEARCH_DURATION
    yield COMPUTE_ERRORS


def ensure_metrics_registered(
    registry: CollectorRegistry | None = None,
) -> None:
    """Register shared metrics with ``registry`` if not already present."""

    target = registry or REGISTRY
    for metric in _iter_metrics():
        try:
            target.register(metric)
        except ValueError:
            # Prometheus raises when a metric name already exists in the registry.
            continue
