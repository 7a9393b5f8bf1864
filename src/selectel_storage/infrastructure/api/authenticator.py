"""
認証エンドポイントとのハンドシェイク。
"""

from __future__ import annotations

import logging
from typing import Callable

import httpx

from ...application.observability import get_metrics_recorder, telemetry_span
from ...domain import (
    Authenticated,
    AuthenticationFailedError,
    Credentials,
    MissingStorageEndpointError,
)
from .settings import ApiClientSettings

LOGGER = logging.getLogger("selectel_storage.api.auth")

AUTH_USER_HEADER = "X-Auth-User"
AUTH_KEY_HEADER = "X-Auth-Key"
AUTH_TOKEN_HEADER = "X-Auth-Token"
STORAGE_URL_HEADER = "X-Storage-Url"


class Authenticator:
    """
    認証エンドポイントに 1 回だけ GET を送り、トークンとストレージ URL を取得する。

    リトライやバックオフは行わない。
    """

    def __init__(
        self,
        settings: ApiClientSettings,
        *,
        client_factory: Callable[[ApiClientSettings], httpx.Client] | None = None,
    ) -> None:
        self._settings = settings
        self._client_factory = client_factory or _default_client_factory

    def authenticate(self, credentials: Credentials) -> Authenticated:
        with telemetry_span("selectel.authenticate", {"auth_url": credentials.auth_url}):
            try:
                session = self._authenticate(credentials)
            except AuthenticationFailedError:
                get_metrics_recorder().increment_authentications("failed")
                LOGGER.warning("Authentication failed for user=%s", credentials.username)
                raise
            except MissingStorageEndpointError:
                get_metrics_recorder().increment_authentications("missing_storage_url")
                LOGGER.warning("Authentication response for user=%s has no storage URL", credentials.username)
                raise

            get_metrics_recorder().increment_authentications("success")
            LOGGER.info("Authenticated user=%s storage_url=%s", credentials.username, session.storage_url)
            return session

    def _authenticate(self, credentials: Credentials) -> Authenticated:
        response = self._authentication_response(credentials)

        token = response.headers.get(AUTH_TOKEN_HEADER)
        if not token:
            raise AuthenticationFailedError("認証情報が正しくありません。")

        storage_url = response.headers.get(STORAGE_URL_HEADER)
        if not storage_url:
            raise MissingStorageEndpointError("認証応答にストレージ URL が含まれていません。")

        return Authenticated(token=token, storage_url=storage_url)

    def _authentication_response(self, credentials: Credentials) -> httpx.Response:
        headers = {
            AUTH_USER_HEADER: credentials.username,
            AUTH_KEY_HEADER: credentials.password,
        }
        try:
            with self._client_factory(self._settings) as client:
                response = client.get(credentials.auth_url, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            # 通信障害と資格情報の誤りは区別しない
            raise AuthenticationFailedError("認証情報が正しくありません。") from exc
        return response


def _default_client_factory(settings: ApiClientSettings) -> httpx.Client:
    return httpx.Client(
        timeout=settings.timeout_seconds,
        verify=settings.verify_ssl,
        follow_redirects=True,
    )
