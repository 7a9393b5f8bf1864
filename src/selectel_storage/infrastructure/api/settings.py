"""
ストレージ API クライアントの接続設定。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ...domain import DEFAULT_AUTH_URL, Credentials


@dataclass(frozen=True)
class ApiClientSettings:
    """
    認証とストレージ API 呼び出しに必要な設定値。
    """

    username: str
    password: str = field(repr=False)
    auth_url: str = DEFAULT_AUTH_URL
    timeout_seconds: float = 30.0
    verify_ssl: bool = True

    @staticmethod
    def from_mapping(mapping: Mapping[str, object]) -> "ApiClientSettings":
        username = _require_str(mapping, "username")
        password = _require_str(mapping, "password")

        raw_auth_url = mapping.get("auth_url")
        auth_url = str(raw_auth_url) if raw_auth_url not in (None, "") else DEFAULT_AUTH_URL

        timeout_seconds = _to_float(mapping.get("timeout_seconds", 30.0), name="timeout_seconds")
        if timeout_seconds <= 0:
            raise ValueError("storage.timeout_seconds は正の値である必要があります。")

        verify_ssl = _to_bool(mapping.get("verify_ssl", True), name="verify_ssl")

        return ApiClientSettings(
            username=username,
            password=password,
            auth_url=auth_url,
            timeout_seconds=timeout_seconds,
            verify_ssl=verify_ssl,
        )

    def to_credentials(self) -> Credentials:
        return Credentials(username=self.username, password=self.password, auth_url=self.auth_url)


def _require_str(mapping: Mapping[str, object], key: str) -> str:
    try:
        value = mapping[key]
    except KeyError as exc:
        raise ValueError(f"storage.{key} が設定されていません。") from exc
    if value in (None, ""):
        raise ValueError(f"storage.{key} は必須です。")
    return str(value)


def _to_float(value: object, *, name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"storage.{name} は真偽値ではなく数値で指定してください。")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise ValueError(f"storage.{name} は数値で指定してください。") from exc
    raise ValueError(f"storage.{name} は数値で指定してください。")


def _to_bool(value: object, *, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    raise ValueError(f"storage.{name} は真偽値で指定してください。")
