"""
ストレージ API 呼び出しのメトリクス記録。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .registry import Counter, Histogram, MetricsRegistry


@dataclass(frozen=True)
class _Instruments:
    default_labels: Mapping[str, str]
    requests: Counter
    request_duration: Histogram
    transport_faults: Counter
    authentications: Counter

    def labels(self, **extra: str) -> dict[str, str]:
        return {**self.default_labels, **extra}


class MetricsRecorder:
    """
    API クライアントから呼ばれるメトリクス記録のエントリポイント。

    ``configure`` されるまでは何も記録しない。``default_labels`` は全メトリクスに付与される。
    """

    _instruments: _Instruments | None = None

    @classmethod
    def configure(
        cls,
        registry: MetricsRegistry,
        *,
        default_labels: Mapping[str, str] | None = None,
    ) -> None:
        defaults = dict(default_labels or {})

        def with_defaults(*names: str) -> tuple[str, ...]:
            return (*defaults, *names)

        # 登録に失敗した場合は以前の設定を維持する
        cls._instruments = _Instruments(
            default_labels=defaults,
            requests=registry.counter(
                "selectel_requests",
                "Storage API requests that received a response",
                labels=with_defaults("method", "status"),
            ),
            request_duration=registry.histogram(
                "selectel_request_duration_seconds",
                "Storage API request duration in seconds",
                labels=with_defaults("method"),
            ),
            transport_faults=registry.counter(
                "selectel_transport_faults",
                "Storage API requests that failed without a response",
                labels=with_defaults("method"),
            ),
            authentications=registry.counter(
                "selectel_authentications",
                "Authentication attempts by outcome",
                labels=with_defaults("outcome"),
            ),
        )

    @classmethod
    def observe_request(cls, method: str, status_code: int, duration_seconds: float) -> None:
        instruments = cls._instruments
        if instruments is None:
            return
        instruments.requests.inc(labels=instruments.labels(method=method, status=str(status_code)))
        instruments.request_duration.observe(duration_seconds, labels=instruments.labels(method=method))

    @classmethod
    def increment_transport_faults(cls, method: str) -> None:
        instruments = cls._instruments
        if instruments is not None:
            instruments.transport_faults.inc(labels=instruments.labels(method=method))

    @classmethod
    def increment_authentications(cls, outcome: str) -> None:
        instruments = cls._instruments
        if instruments is not None:
            instruments.authentications.inc(labels=instruments.labels(outcome=outcome))

    @classmethod
    def reset(cls) -> None:
        cls._instruments = None
