"""
認証とリクエスト送信の経路から呼ぶメトリクス・トレーシングのフック。

bootstrap でメトリクス実装が登録されるまでは何も記録しない。
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from typing import Callable, ContextManager, Mapping, Protocol

SpanFactory = Callable[[str, Mapping[str, object] | None], ContextManager[object]]


class MetricsRecorderProtocol(Protocol):
    def observe_request(self, method: str, status_code: int, duration_seconds: float) -> None: ...

    def increment_transport_faults(self, method: str) -> None: ...

    def increment_authentications(self, outcome: str) -> None: ...

    def reset(self) -> None: ...


class _NoopMetricsRecorder:
    def observe_request(self, method: str, status_code: int, duration_seconds: float) -> None:
        pass

    def increment_transport_faults(self, method: str) -> None:
        pass

    def increment_authentications(self, outcome: str) -> None:
        pass

    def reset(self) -> None:
        pass


@dataclass
class _Hooks:
    recorder: MetricsRecorderProtocol
    span_factory: SpanFactory | None = None


_hooks = _Hooks(recorder=_NoopMetricsRecorder())


def use_metrics_recorder(recorder: MetricsRecorderProtocol) -> None:
    _hooks.recorder = recorder


def get_metrics_recorder() -> MetricsRecorderProtocol:
    """登録済みのレコーダを返す。呼び出しのたびに参照するため、後からの差し替えも反映される。"""

    return _hooks.recorder


def use_telemetry_span(factory: SpanFactory | None) -> None:
    _hooks.span_factory = factory


def telemetry_span(name: str, attributes: Mapping[str, object] | None = None) -> ContextManager[object]:
    """
    ``with telemetry_span("selectel.request", {...}):`` の形で使う。

    スパンファクトリ未登録時は何もしないコンテキストを返す。
    """

    factory = _hooks.span_factory
    if factory is None:
        return nullcontext()
    return factory(name, attributes)


def reset_observability() -> None:
    use_metrics_recorder(_NoopMetricsRecorder())
    use_telemetry_span(None)
