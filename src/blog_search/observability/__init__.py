"""Observability module for logging, metrics, and tracing."""

from blog_search.observability.context import get_trace_context, set_trace_context, trace_context
from blog_search.observability.logging import JsonFormatter, configure_logging, configure_logging_from_settings
from blog_search.observability.metrics import (
    INDEX_BUILD_LATENCY,
    INDEX_DOC_COUNT,
    SEARCH_LATENCY,
    SEARCH_QUERIES,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from blog_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "INDEX_BUILD_LATENCY",
    "INDEX_DOC_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_QUERIES",
    "JsonFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
