"""Prometheus metrics for search observability."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


SEARCH_LATENCY = Histogram(
    "blog_search_latency_seconds",
    "Search query latency",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
)

SEARCH_QUERIES = Counter(
    "blog_search_queries_total",
    "Search queries by outcome",
    ["outcome"],
)

INDEX_DOC_COUNT = Gauge(
    "blog_search_index_document_count",
    "Documents in the current corpus index",
)

INDEX_BUILD_LATENCY = Histogram(
    "blog_search_index_build_seconds",
    "Corpus index build latency",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)


@contextmanager
def track_latency(histogram: Histogram) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get content type for a metrics endpoint."""
    return CONTENT_TYPE_LATEST
