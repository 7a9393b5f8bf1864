"""
OpenTelemetry によるトレーシング。

``TelemetryManager.configure`` を呼ぶまでは ``span`` は何も記録しない。
"""

from __future__ import annotations

import atexit
from contextlib import contextmanager
from typing import Iterator, Mapping

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

DEFAULT_SERVICE_NAME = "selectel-storage"

_PRIMITIVES = (str, bool, int, float)


class TelemetryManager:
    _provider: TracerProvider | None = None
    _tracer: trace.Tracer | None = None

    @classmethod
    def configure(
        cls,
        *,
        exporter: SpanExporter,
        service_name: str = DEFAULT_SERVICE_NAME,
        additional_resources: Mapping[str, str] | None = None,
    ) -> None:
        """
        専用の TracerProvider を作り、以後のスパンを ``exporter`` へ送る。

        プロセス全体の TracerProvider は変更しない。再設定時は前のプロバイダを停止する。
        """

        cls.shutdown()

        resource = Resource.create({"service.name": service_name, **(additional_resources or {})})
        provider = TracerProvider(resource=resource)
        provider.add_span_processor(BatchSpanProcessor(exporter))
        cls._provider = provider
        cls._tracer = provider.get_tracer(service_name)
        atexit.register(cls.shutdown)

    @classmethod
    def is_configured(cls) -> bool:
        return cls._tracer is not None

    @classmethod
    def flush(cls) -> None:
        if cls._provider is not None:
            cls._provider.force_flush()

    @classmethod
    def shutdown(cls) -> None:
        provider, cls._provider, cls._tracer = cls._provider, None, None
        if provider is not None:
            atexit.unregister(cls.shutdown)
            provider.shutdown()

    @classmethod
    @contextmanager
    def span(cls, name: str, attributes: Mapping[str, object] | None = None) -> Iterator[object]:
        tracer = cls._tracer
        if tracer is None:
            yield None
            return
        with tracer.start_as_current_span(name) as span:
            for key, value in (attributes or {}).items():
                span.set_attribute(key, value if isinstance(value, _PRIMITIVES) else str(value))
            yield span
