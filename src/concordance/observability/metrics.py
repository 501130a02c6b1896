"""Prometheus metrics for ingestion and search."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


DOCUMENTS_INGESTED = Counter(
    "concordance_documents_ingested_total",
    "Documents processed by the loader",
    ["status"],
)

CONTEXTS_WRITTEN = Counter(
    "concordance_contexts_written_total",
    "Context windows persisted",
)

SEARCH_LATENCY = Histogram(
    "concordance_search_latency_seconds",
    "Concordance search latency",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        target = histogram.labels(**labels) if labels else histogram
        target.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()
