"""Unit tests for observability module."""

import json
import logging

from opentelemetry import trace as trace_api
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode
import pytest

from blog_search.config import Settings
from blog_search.observability import (
    SEARCH_QUERIES,
    JsonFormatter,
    configure_logging,
    configure_logging_from_settings,
    create_span,
    get_metrics,
    get_trace_context,
    set_trace_context,
    tracing as tracing_module,
)
from blog_search.search.engine import PostSearchEngine


@pytest.fixture
def span_exporter(monkeypatch):
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setitem(tracing_module._tracer_holder, "tracer", provider.get_tracer("test"))
    return exporter


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("blog_search.search.engine", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
def test_json_formatter_includes_trace_context():
    set_trace_context("a" * 32, "b" * 16)

    payload = json.loads(JsonFormatter().format(_record("hello")))

    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["trace_id"] == "a" * 32
    assert payload["span_id"] == "b" * 16
    assert payload["component"] == "engine"


@pytest.mark.unit
def test_json_formatter_extra_fields_are_clipped():
    payload = json.loads(JsonFormatter().format(_record("x" * 3000, query="q" * 600, hits={1, 2})))

    assert payload["message"].endswith("...")
    assert len(payload["message"]) == JsonFormatter.MAX_MESSAGE_LEN + 3
    assert payload["query"] == "q" * 500 + "..."
    assert payload["hits"] == [1, 2]


@pytest.mark.unit
def test_get_trace_context_generates_ids():
    ctx = get_trace_context()

    assert len(ctx["trace_id"]) == 32
    assert len(ctx["span_id"]) == 16


@pytest.mark.unit
def test_configure_logging_text_and_overrides():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("warning", json_output=False, logger_levels={"blog_search": "debug"})

        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("blog_search").level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        logging.getLogger("blog_search").setLevel(logging.NOTSET)


@pytest.mark.unit
def test_create_span_records_errors(span_exporter):
    with pytest.raises(RuntimeError), create_span("search.fail", attributes={"k": "v"}):
        raise RuntimeError("boom")

    (span,) = span_exporter.get_finished_spans()
    assert span.name == "search.fail"
    assert span.attributes["k"] == "v"
    assert span.status.status_code == StatusCode.ERROR


@pytest.mark.unit
def test_search_emits_span_and_metrics(span_exporter, sample_documents):
    engine = PostSearchEngine(sample_documents)
    before = SEARCH_QUERIES.labels(outcome="rejected")._value.get()

    engine.search("react")
    engine.search("x")

    names = [span.name for span in span_exporter.get_finished_spans()]
    assert names.count("search.query") == 2
    query_span = next(s for s in span_exporter.get_finished_spans() if s.attributes.get("search.result_count"))
    assert query_span.attributes["search.result_count"] >= 1
    assert SEARCH_QUERIES.labels(outcome="rejected")._value.get() == before + 1
    assert b"blog_search_queries_total" in get_metrics()
    assert trace_api.get_current_span() is trace_api.INVALID_SPAN


@pytest.mark.unit
def test_configure_logging_from_settings_uses_json():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging_from_settings(Settings(log_level="error", log_json=True))

        assert root.level == logging.ERROR
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
