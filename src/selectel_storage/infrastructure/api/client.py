"""
認証済みリクエストのディスパッチャ。
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Mapping

import httpx

from ...application.observability import get_metrics_recorder, telemetry_span
from ...domain import Authenticated, Credentials, RequestParameters, SessionState, SessionStore
from ...domain.requests import RequestBody
from .authenticator import AUTH_TOKEN_HEADER, Authenticator
from .outcome import DispatchOutcome, StructuredResponse, UnrecoveredFault
from .settings import ApiClientSettings

LOGGER = logging.getLogger("selectel_storage.api.client")

ClientFactory = Callable[[ApiClientSettings, Authenticated], httpx.Client]


class ApiClient:
    """
    ストレージ API へのリクエストを担当するクライアント。

    初回リクエスト時に遅延して認証し、以後はキャッシュしたトークンを
    ``X-Auth-Token`` ヘッダとして全リクエストに付与する。すべてのリクエストの
    クエリには ``format=json`` が強制される。2xx 以外の応答も例外にはせず、
    そのまま呼び出し側へ返す。
    """

    def __init__(
        self,
        settings: ApiClientSettings,
        *,
        authenticator: Authenticator | None = None,
        auth_client_factory: Callable[[ApiClientSettings], httpx.Client] | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings
        self._credentials = settings.to_credentials()
        self._authenticator = authenticator or Authenticator(settings, client_factory=auth_client_factory)
        self._client_factory = client_factory or _default_client_factory
        self._session = SessionStore()
        self._http_client: httpx.Client | None = None
        self._owns_http_client = False
        self._http_client_lock = threading.Lock()

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def session(self) -> SessionState:
        return self._session.state

    @property
    def authenticated(self) -> bool:
        return self._session.authenticated

    @property
    def token(self) -> str | None:
        state = self._session.state
        return state.token if isinstance(state, Authenticated) else None

    @property
    def storage_url(self) -> str | None:
        state = self._session.state
        return state.storage_url if isinstance(state, Authenticated) else None

    def authenticate(self) -> Authenticated:
        """
        未認証であれば認証を行う。認証済みであれば何もしない。

        Raises:
            AuthenticationFailedError: 資格情報の誤り、または認証時の通信障害。
            MissingStorageEndpointError: 認証応答にストレージ URL が無い。
        """

        return self._session.ensure(lambda: self._authenticator.authenticate(self._credentials))

    def use_http_client(self, client: httpx.Client) -> "ApiClient":
        """
        ストレージ API 呼び出しに使う HTTP クライアントを差し替える。

        差し替えたクライアントはそのまま使われ、``close`` でも閉じない。
        """

        with self._http_client_lock:
            self._release_http_client()
            self._http_client = client
            self._owns_http_client = False
        return self

    def http_client(self) -> httpx.Client:
        """
        ストレージ API 用の HTTP クライアントを返す。未生成なら認証後に 1 つだけ生成する。
        """

        client = self._http_client
        if client is not None:
            return client

        session = self.authenticate()
        with self._http_client_lock:
            if self._http_client is None:
                self._http_client = self._client_factory(self._settings, session)
                self._owns_http_client = True
            return self._http_client

    def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, str | int] | None = None,
        headers: Mapping[str, str] | None = None,
        body: RequestBody | None = None,
    ) -> httpx.Response:
        """
        認証済みリクエストを送り、その応答を返す。

        Raises:
            AuthError: 認証が必要で、かつ失敗した場合。
            UnrecoveredTransportError: 応答を伴わない通信障害。
        """

        params = RequestParameters(
            method=method,
            path=path,
            query=dict(query or {}),
            headers=dict(headers or {}),
            body=body,
        )
        return self.dispatch(params).unwrap()

    def dispatch(self, params: RequestParameters) -> DispatchOutcome:
        """
        リクエストを送り、応答の有無を区別した結果を返す。

        認証エラーのみ例外として伝播する。
        """

        self.authenticate()
        client = self.http_client()
        outgoing = params.with_forced_format()

        with telemetry_span("selectel.request", {"method": outgoing.method, "path": outgoing.path}):
            start = time.perf_counter()
            try:
                response = client.request(
                    outgoing.method,
                    _relative_path(outgoing.path),
                    params=dict(outgoing.query),
                    headers=dict(outgoing.headers),
                    **_body_argument(outgoing.body),
                )
            except httpx.HTTPStatusError as exc:
                response = exc.response
            except httpx.HTTPError as exc:
                get_metrics_recorder().increment_transport_faults(outgoing.method)
                LOGGER.warning(
                    "Request failed without response method=%s path=%s: %s",
                    outgoing.method,
                    outgoing.path,
                    exc,
                )
                return UnrecoveredFault(cause=exc, method=outgoing.method, path=outgoing.path)

            duration = time.perf_counter() - start
            get_metrics_recorder().observe_request(outgoing.method, response.status_code, duration)
            LOGGER.debug(
                "%s %s -> %s in %.3f seconds",
                outgoing.method,
                outgoing.path,
                response.status_code,
                duration,
            )
            return StructuredResponse(response)

    def get(
        self,
        path: str,
        *,
        query: Mapping[str, str | int] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        return self.request("GET", path, query=query, headers=headers)

    def head(self, path: str, *, headers: Mapping[str, str] | None = None) -> httpx.Response:
        return self.request("HEAD", path, headers=headers)

    def put(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: RequestBody | None = None,
    ) -> httpx.Response:
        return self.request("PUT", path, headers=headers, body=body)

    def post(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: RequestBody | None = None,
    ) -> httpx.Response:
        return self.request("POST", path, headers=headers, body=body)

    def delete(self, path: str, *, headers: Mapping[str, str] | None = None) -> httpx.Response:
        return self.request("DELETE", path, headers=headers)

    def copy(self, path: str, *, destination: str, headers: Mapping[str, str] | None = None) -> httpx.Response:
        merged = dict(headers or {})
        merged["Destination"] = destination
        return self.request("COPY", path, headers=merged)

    def close(self) -> None:
        """
        自身で生成した HTTP クライアントをクローズする。
        """

        with self._http_client_lock:
            self._release_http_client()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _release_http_client(self) -> None:
        # _http_client_lock を保持した状態で呼ぶ
        if self._http_client is not None and self._owns_http_client:
            self._http_client.close()
        self._http_client = None
        self._owns_http_client = False


def _default_client_factory(settings: ApiClientSettings, session: Authenticated) -> httpx.Client:
    return httpx.Client(
        base_url=session.storage_url,
        headers={AUTH_TOKEN_HEADER: session.token},
        timeout=settings.timeout_seconds,
        verify=settings.verify_ssl,
    )


def _relative_path(path: str) -> str:
    # 絶対 URL 以外は base_url 配下のパスとして扱う
    if path.startswith(("http://", "https://")):
        return path
    return "/" + path.lstrip("/")


def _body_argument(body: RequestBody | None) -> dict[str, object]:
    if body is None:
        return {}
    return {"content": body}
