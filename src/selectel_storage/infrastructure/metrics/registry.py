"""
メトリクスの記録先を差し替えるための最小インターフェース。

記録側 (MetricsRecorder) はこのプロトコルだけに依存し、
prometheus-client への依存は prometheus_runtime に閉じる。
"""

from __future__ import annotations

from typing import Mapping, Protocol


class Counter(Protocol):
    def inc(self, value: float = 1.0, labels: Mapping[str, str] | None = None) -> None: ...


class Histogram(Protocol):
    def observe(self, value: float, labels: Mapping[str, str] | None = None) -> None: ...


class MetricsRegistry(Protocol):
    def counter(self, name: str, documentation: str, labels: tuple[str, ...] | None = None) -> Counter: ...

    def histogram(self, name: str, documentation: str, labels: tuple[str, ...] | None = None) -> Histogram: ...
