"""
環境変数から設定を読み込み、検証済みの ConfigBundle を生成するローダ。
"""

from __future__ import annotations

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..domain import DEFAULT_AUTH_URL
from .container import (
    ConfigBundle,
    ConfigLoader,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from .logging_setup import default_logging_config

ENV_PREFIX = "SELECTEL_"

_STORAGE_KEYS = ("username", "password", "auth_url", "timeout_seconds", "verify_ssl")
_REQUIRED_STORAGE_KEYS = ("username", "password")


class StorageConfigModel(BaseModel):
    """storage セクションの検証モデル。"""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)
    auth_url: str = Field(default=DEFAULT_AUTH_URL, min_length=1)
    timeout_seconds: float = Field(default=30.0, gt=0)
    verify_ssl: bool = True


class LoggingConfigModel(BaseModel):
    """logging 設定の最小検証モデル。"""

    model_config = ConfigDict(extra="allow")

    version: int


class MetricsConfigModel(BaseModel):
    """metrics 設定の最小検証モデル。"""

    model_config = ConfigDict(extra="allow")

    provider: str


class AppConfigModel(BaseModel):
    """
    設定全体のバリデーション。

    storage, logging, metrics の 3 セクションを必須とする。
    """

    model_config = ConfigDict(extra="allow")

    storage: StorageConfigModel
    logging: LoggingConfigModel
    metrics: MetricsConfigModel


class EnvConfigLoader(ConfigLoader):
    """
    ``SELECTEL_*`` 環境変数から設定を組み立てる実装。

    ``SELECTEL_USERNAME`` / ``SELECTEL_PASSWORD`` は必須。
    ``SELECTEL_AUTH_URL``, ``SELECTEL_TIMEOUT_SECONDS``, ``SELECTEL_VERIFY_SSL``,
    ``SELECTEL_LOG_LEVEL``, ``SELECTEL_METRICS_PROVIDER`` は任意。
    """

    def __init__(self, environ: Mapping[str, str] | None = None, *, prefix: str = ENV_PREFIX) -> None:
        self._environ = environ if environ is not None else os.environ
        self._prefix = prefix

    def load(self) -> ConfigBundle:
        storage = self._storage_section()
        raw = {
            "storage": storage,
            "logging": default_logging_config(self._get("LOG_LEVEL") or "WARNING"),
            "metrics": {"provider": self._get("METRICS_PROVIDER") or "noop"},
        }

        try:
            validated = AppConfigModel(**raw)
        except ValidationError as exc:
            raise InvalidConfigurationError("設定値の検証に失敗しました。") from exc

        return ConfigBundle(root=validated.model_dump())

    def _storage_section(self) -> dict[str, Any]:
        for key in _REQUIRED_STORAGE_KEYS:
            if not self._get(key.upper()):
                raise MissingConfigurationError(
                    f"環境変数 '{self._prefix}{key.upper()}' が未設定のため、設定をロードできません。"
                )

        section: dict[str, Any] = {}
        for key in _STORAGE_KEYS:
            value = self._get(key.upper())
            if value is not None and value != "":
                section[key] = value
        return section

    def _get(self, name: str) -> str | None:
        return self._environ.get(f"{self._prefix}{name}")
