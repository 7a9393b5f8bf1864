"""
prometheus-client を使った MetricsRegistry 実装。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

from prometheus_client import CollectorRegistry, Counter as PrometheusCounter, Histogram as PrometheusHistogram
from prometheus_client.metrics import MetricWrapperBase

from .registry import Counter, Histogram, MetricsRegistry

# ストレージ API の応答時間は数十ミリ秒からタイムアウト (既定 30 秒) まで分布する
DEFAULT_DURATION_BUCKETS: tuple[float, ...] = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0)


class _LabelledMetric:
    def __init__(self, metric: MetricWrapperBase) -> None:
        self._metric = metric

    def _child(self, labels: Mapping[str, str] | None):
        return self._metric.labels(**labels) if labels else self._metric


class _CounterAdapter(_LabelledMetric, Counter):
    def inc(self, value: float = 1.0, labels: Mapping[str, str] | None = None) -> None:
        self._child(labels).inc(value)


class _HistogramAdapter(_LabelledMetric, Histogram):
    def observe(self, value: float, labels: Mapping[str, str] | None = None) -> None:
        self._child(labels).observe(value)


@dataclass
class PrometheusMetricsRegistry(MetricsRegistry):
    """
    メトリクス名ごとに prometheus-client のメトリクスを 1 度だけ生成して使い回す。

    Attributes:
        registry: 登録先のレジストリ。
        histogram_buckets: ヒストグラム名ごとのバケット境界。未指定の名前には
            ``DEFAULT_DURATION_BUCKETS`` を使う。
    """

    registry: CollectorRegistry
    histogram_buckets: Mapping[str, Sequence[float]] | None = None

    _metrics: dict[str, tuple[tuple[str, ...], MetricWrapperBase]] = field(default_factory=dict, init=False)

    def counter(self, name: str, documentation: str, labels: tuple[str, ...] | None = None) -> Counter:
        metric = self._get_or_create(
            name,
            labels,
            lambda label_names: PrometheusCounter(
                name, documentation, labelnames=label_names, registry=self.registry
            ),
        )
        return _CounterAdapter(metric)

    def histogram(self, name: str, documentation: str, labels: tuple[str, ...] | None = None) -> Histogram:
        buckets = self._buckets_for(name)
        metric = self._get_or_create(
            name,
            labels,
            lambda label_names: PrometheusHistogram(
                name, documentation, labelnames=label_names, buckets=buckets, registry=self.registry
            ),
        )
        return _HistogramAdapter(metric)

    def _get_or_create(
        self,
        name: str,
        labels: tuple[str, ...] | None,
        factory: Callable[[tuple[str, ...]], MetricWrapperBase],
    ) -> MetricWrapperBase:
        label_names = tuple(sorted(labels or ()))
        registered = self._metrics.get(name)
        if registered is None:
            metric = factory(label_names)
            self._metrics[name] = (label_names, metric)
            return metric

        registered_labels, metric = registered
        if registered_labels != label_names:
            raise ValueError(
                f"メトリクス '{name}' はラベル {registered_labels} で登録済みのため {label_names} では使えません。"
            )
        return metric

    def _buckets_for(self, name: str) -> tuple[float, ...]:
        raw = (self.histogram_buckets or {}).get(name)
        if not raw:
            return DEFAULT_DURATION_BUCKETS
        return tuple(float(boundary) for boundary in raw)
