from __future__ import annotations

from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from selectel_storage.application.observability import telemetry_span, use_telemetry_span
from selectel_storage.infrastructure.metrics import TelemetryManager


def test_span_is_noop_until_configured() -> None:
    assert not TelemetryManager.is_configured()
    with TelemetryManager.span("selectel.request") as span:
        assert span is None


def test_configured_span_is_exported_with_attributes() -> None:
    exporter = InMemorySpanExporter()
    TelemetryManager.configure(exporter=exporter, service_name="selectel-storage-test")
    use_telemetry_span(TelemetryManager.span)
    try:
        with telemetry_span("selectel.request", {"method": "GET", "path": "/", "extra": ["a", "b"]}):
            pass
        TelemetryManager.flush()

        spans = exporter.get_finished_spans()
        assert [span.name for span in spans] == ["selectel.request"]
        attributes = spans[0].attributes or {}
        assert attributes["method"] == "GET"
        assert attributes["path"] == "/"
        assert attributes["extra"] == "['a', 'b']"
    finally:
        TelemetryManager.shutdown()
