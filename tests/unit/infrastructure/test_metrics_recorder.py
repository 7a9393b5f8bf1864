from __future__ import annotations

import httpx
import pytest
from prometheus_client import CollectorRegistry

from selectel_storage.application.observability import use_metrics_recorder
from selectel_storage.infrastructure.api import ApiClient, ApiClientSettings
from selectel_storage.infrastructure.metrics import MetricsRecorder, PrometheusMetricsRegistry


def test_metrics_recorder_updates_prometheus_metrics() -> None:
    registry = CollectorRegistry()
    MetricsRecorder.configure(PrometheusMetricsRegistry(registry=registry), default_labels={"service": "test"})

    MetricsRecorder.observe_request("GET", 200, 0.25)
    MetricsRecorder.observe_request("GET", 200, 0.5)
    MetricsRecorder.increment_transport_faults("PUT")
    MetricsRecorder.increment_authentications("success")

    requests_total = registry.get_sample_value(
        "selectel_requests_total",
        labels={"method": "GET", "status": "200", "service": "test"},
    )
    assert requests_total == 2.0

    duration_sum = registry.get_sample_value(
        "selectel_request_duration_seconds_sum",
        labels={"method": "GET", "service": "test"},
    )
    assert duration_sum == 0.75

    faults_total = registry.get_sample_value(
        "selectel_transport_faults_total",
        labels={"method": "PUT", "service": "test"},
    )
    assert faults_total == 1.0

    auth_total = registry.get_sample_value(
        "selectel_authentications_total",
        labels={"outcome": "success", "service": "test"},
    )
    assert auth_total == 1.0


def test_metrics_recorder_ignores_updates_until_configured() -> None:
    MetricsRecorder.observe_request("GET", 200, 0.1)
    MetricsRecorder.increment_authentications("failed")


def test_api_client_records_request_and_authentication_metrics() -> None:
    registry = CollectorRegistry()
    MetricsRecorder.configure(PrometheusMetricsRegistry(registry=registry))
    use_metrics_recorder(MetricsRecorder)

    auth_transport = httpx.MockTransport(
        lambda _: httpx.Response(204, headers={"X-Auth-Token": "tok", "X-Storage-Url": "https://store.example/v1/a"})
    )
    storage_transport = httpx.MockTransport(lambda _: httpx.Response(404))
    client = ApiClient(
        ApiClientSettings(username="user", password="pass"),
        auth_client_factory=lambda _: httpx.Client(transport=auth_transport),
        client_factory=lambda _, session: httpx.Client(base_url=session.storage_url, transport=storage_transport),
    )

    client.request("HEAD", "/missing")
    client.close()

    assert registry.get_sample_value("selectel_authentications_total", labels={"outcome": "success"}) == 1.0
    assert registry.get_sample_value("selectel_requests_total", labels={"method": "HEAD", "status": "404"}) == 1.0
    assert registry.get_sample_value("selectel_request_duration_seconds_count", labels={"method": "HEAD"}) == 1.0


def test_prometheus_registry_reuses_metric_and_rejects_other_labels() -> None:
    registry = PrometheusMetricsRegistry(registry=CollectorRegistry())

    registry.counter("selectel_requests", "doc", labels=("method",)).inc(labels={"method": "GET"})
    registry.counter("selectel_requests", "doc", labels=("method",)).inc(labels={"method": "GET"})

    assert registry.registry.get_sample_value("selectel_requests_total", labels={"method": "GET"}) == 2.0
    with pytest.raises(ValueError):
        registry.counter("selectel_requests", "doc", labels=("status",))


def test_prometheus_registry_histogram_buckets() -> None:
    collector = CollectorRegistry()
    registry = PrometheusMetricsRegistry(registry=collector, histogram_buckets={"custom_seconds": [1, 5]})

    registry.histogram("custom_seconds", "doc").observe(3.0)
    registry.histogram("default_seconds", "doc").observe(3.0)

    assert collector.get_sample_value("custom_seconds_bucket", labels={"le": "5.0"}) == 1.0
    assert collector.get_sample_value("custom_seconds_bucket", labels={"le": "1.0"}) == 0.0
    assert collector.get_sample_value("default_seconds_bucket", labels={"le": "2.5"}) == 0.0
    assert collector.get_sample_value("default_seconds_bucket", labels={"le": "5.0"}) == 1.0
