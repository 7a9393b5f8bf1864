"""
設定から ApiClient を組み立てるまでの初期化手順。

設定をロードして storage セクションを検証し、ロギングとメトリクスを適用してから
ApiClient を生成する。
ApiClient は生成しただけでは通信しない (認証は初回リクエスト時)。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

from ..domain import SelectelStorageError
from ..infrastructure.api import ApiClient, ApiClientSettings


class ConfigLoader(Protocol):
    def load(self) -> "ConfigBundle": ...


class LoggingConfigurator(Protocol):
    def configure(self, config: Mapping[str, Any]) -> None: ...


class MetricsConfigurator(Protocol):
    def configure(self, config: Mapping[str, Any]) -> None: ...


class ConfigurationError(SelectelStorageError):
    """初期化時の設定エラー。"""


class MissingConfigurationError(ConfigurationError):
    pass


class InvalidConfigurationError(ConfigurationError):
    pass


@dataclass(frozen=True)
class ConfigBundle:
    """
    検証済みの設定。トップレベルのキーをセクションとして扱う。

    storage セクションにパスワードを含むため repr には出さない。
    """

    root: Mapping[str, Any] = field(repr=False)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.root)

    def require_section(self, section: str) -> Mapping[str, Any]:
        """
        Raises:
            MissingConfigurationError: ``section`` が無い。
            InvalidConfigurationError: ``section`` がマッピングではない。
        """

        try:
            value = self.root[section]
        except KeyError:
            raise MissingConfigurationError(f"[{section}] セクションがありません。") from None
        if not isinstance(value, Mapping):
            raise InvalidConfigurationError(f"[{section}] セクションはマッピングで指定してください。")
        return value

    def require_value(self, section: str, key: str) -> Any:
        values = self.require_section(section)
        if key not in values:
            raise MissingConfigurationError(f"{section}.{key} がありません。")
        return values[key]


@dataclass(frozen=True)
class BootstrapContext:
    config: ConfigBundle
    settings: ApiClientSettings
    client: ApiClient


@dataclass
class BootstrapContainer:
    """
    Attributes:
        config_loader: ``storage`` / ``logging`` / ``metrics`` セクションを返すローダ。
        logging_configurator: ``logging`` セクションを適用する。
        metrics_configurator: ``metrics`` セクションを適用する。
        client_builder: ``ApiClientSettings`` から ApiClient を作る。テストで差し替える。
    """

    config_loader: ConfigLoader
    logging_configurator: LoggingConfigurator
    metrics_configurator: MetricsConfigurator
    client_builder: Callable[[ApiClientSettings], ApiClient] = ApiClient

    def initialize(self) -> BootstrapContext:
        """
        Raises:
            ConfigurationError: 設定の欠落、または不正な値。
        """

        bundle = self.config_loader.load()
        try:
            settings = ApiClientSettings.from_mapping(bundle.require_section("storage"))
        except ValueError as exc:
            raise InvalidConfigurationError(str(exc)) from exc

        # プロセス全体に及ぶ設定は storage の検証が通ってから適用する
        self.logging_configurator.configure(bundle.require_section("logging"))
        self.metrics_configurator.configure(bundle.require_section("metrics"))

        return BootstrapContext(config=bundle, settings=settings, client=self.client_builder(settings))
