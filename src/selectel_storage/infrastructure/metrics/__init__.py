"""
メトリクス・トレーシング関連の公開API。
"""

from .prometheus_runtime import PrometheusMetricsRegistry
from .recorder import MetricsRecorder
from .registry import Counter, Histogram, MetricsRegistry
from .telemetry_runtime import TelemetryManager

__all__ = [
    "Counter",
    "Histogram",
    "MetricsRegistry",
    "MetricsRecorder",
    "PrometheusMetricsRegistry",
    "TelemetryManager",
]
