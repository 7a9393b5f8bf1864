"""
metrics セクションに従ってメトリクスとトレーシングを初期化する。

``provider`` が ``noop`` なら何も記録しない。``prometheus`` なら MetricsRecorder を
prometheus-client のレジストリに接続し、``options.tracing`` があれば
OpenTelemetry のスパン出力も有効にする。
"""

from __future__ import annotations

from typing import Any, ClassVar, Literal, Mapping

from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SpanExporter
from prometheus_client import REGISTRY, CollectorRegistry
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..application.observability import reset_observability, use_metrics_recorder, use_telemetry_span
from ..infrastructure.metrics import MetricsRecorder, PrometheusMetricsRegistry, TelemetryManager
from ..infrastructure.metrics.telemetry_runtime import DEFAULT_SERVICE_NAME
from .container import InvalidConfigurationError, MetricsConfigurator

_SPAN_EXPORTERS: Mapping[str, type[SpanExporter]] = {
    "console": ConsoleSpanExporter,
}


class TracingOptionsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    exporter: Literal["console"] = "console"
    service_name: str = Field(default=DEFAULT_SERVICE_NAME, min_length=1)


class PrometheusOptionsModel(BaseModel):
    """metrics.options の検証モデル。"""

    model_config = ConfigDict(extra="forbid")

    histogram_buckets: dict[str, list[float]] = Field(default_factory=dict)
    default_labels: dict[str, str] = Field(default_factory=dict)
    tracing: TracingOptionsModel | None = None

    @field_validator("default_labels", mode="before")
    @classmethod
    def _stringify_labels(cls, value: object) -> object:
        if isinstance(value, Mapping):
            return {key: str(label) for key, label in value.items()}
        return value


def _provider_of(config: Mapping[str, Any]) -> str:
    provider = config.get("provider")
    if provider is None:
        raise InvalidConfigurationError("metrics 設定に 'provider' がありません。")
    if not isinstance(provider, str) or not provider:
        raise InvalidConfigurationError("metrics.provider は空でない文字列で指定してください。")
    return provider


class _ProviderConfigurator(MetricsConfigurator):
    EXPECTED_PROVIDER: ClassVar[str]

    def _check_provider(self, config: Mapping[str, Any]) -> None:
        provider = _provider_of(config)
        if provider != self.EXPECTED_PROVIDER:
            raise InvalidConfigurationError(
                f"{type(self).__name__} は provider '{provider}' を扱えません。"
            )


class MetricsConfiguratorRegistry(MetricsConfigurator):
    """provider 名で初期化処理を選ぶ。"""

    def __init__(self, delegates: Mapping[str, MetricsConfigurator]) -> None:
        if not delegates:
            raise ValueError("metrics provider が 1 つも登録されていません。")
        self._delegates = dict(delegates)

    def configure(self, config: Mapping[str, Any]) -> None:
        provider = _provider_of(config)
        try:
            delegate = self._delegates[provider]
        except KeyError:
            supported = ", ".join(sorted(self._delegates))
            raise InvalidConfigurationError(
                f"metrics provider '{provider}' には対応していません (対応: {supported})。"
            ) from None
        delegate.configure(config)


class NoopMetricsConfigurator(_ProviderConfigurator):
    EXPECTED_PROVIDER = "noop"

    def configure(self, config: Mapping[str, Any]) -> None:
        self._check_provider(config)
        TelemetryManager.shutdown()
        reset_observability()


class PrometheusMetricsConfigurator(_ProviderConfigurator):
    """
    MetricsRecorder を prometheus-client に接続する。

    registry を省略した場合は prometheus_client の既定レジストリを使う。
    同じレジストリへ同名メトリクスを二重登録しないよう、
    2 回目以降の configure では最初に作った PrometheusMetricsRegistry を使い回す。
    """

    EXPECTED_PROVIDER = "prometheus"

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry if registry is not None else REGISTRY
        self._metrics_registry: PrometheusMetricsRegistry | None = None

    def configure(self, config: Mapping[str, Any]) -> None:
        self._check_provider(config)
        options = _parse_options(config.get("options", {}))

        if self._metrics_registry is None:
            self._metrics_registry = PrometheusMetricsRegistry(
                registry=self._registry,
                histogram_buckets=options.histogram_buckets,
            )
        try:
            MetricsRecorder.configure(self._metrics_registry, default_labels=options.default_labels)
        except ValueError as exc:
            raise InvalidConfigurationError("metrics.options.default_labels は初回設定から変更できません。") from exc
        use_metrics_recorder(MetricsRecorder)

        if options.tracing is not None:
            TelemetryManager.configure(
                exporter=_SPAN_EXPORTERS[options.tracing.exporter](),
                service_name=options.tracing.service_name,
                additional_resources=options.default_labels,
            )
        use_telemetry_span(TelemetryManager.span)


def default_metrics_configurator(registry: CollectorRegistry | None = None) -> MetricsConfiguratorRegistry:
    return MetricsConfiguratorRegistry(
        {
            NoopMetricsConfigurator.EXPECTED_PROVIDER: NoopMetricsConfigurator(),
            PrometheusMetricsConfigurator.EXPECTED_PROVIDER: PrometheusMetricsConfigurator(registry),
        }
    )


def _parse_options(raw: object) -> PrometheusOptionsModel:
    if not isinstance(raw, Mapping):
        raise InvalidConfigurationError("metrics.options は Mapping で指定してください。")
    try:
        return PrometheusOptionsModel.model_validate(dict(raw))
    except ValidationError as exc:
        raise InvalidConfigurationError("metrics.options の検証に失敗しました。") from exc
