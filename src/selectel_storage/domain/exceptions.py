"""
ストレージクライアントが送出する例外の定義。
"""

from __future__ import annotations


class SelectelStorageError(RuntimeError):
    """クライアントが送出する基底例外。"""

    default_status_code: int | None = None

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code if status_code is not None else self.default_status_code


class AuthError(SelectelStorageError):
    """認証処理に関する例外。"""


class AuthenticationFailedError(AuthError):
    """
    認証に失敗した。

    資格情報の誤りと通信障害は区別しない。
    """

    default_status_code = 403


class MissingStorageEndpointError(AuthError):
    """認証応答に X-Storage-Url が含まれていない。"""

    default_status_code = 500


class UnrecoveredTransportError(SelectelStorageError):
    """応答を伴わない通信障害（DNS 解決失敗、接続拒否など）。"""


class ApiRequestFailedError(SelectelStorageError):
    """API 応答のステータスコードが期待値と一致しない。"""


class ResourceAlreadyExistsError(ApiRequestFailedError):
    """作成対象が既に存在する。"""


class ResourceNotFoundError(ApiRequestFailedError):
    """対象が存在しない。"""


class ResourceConflictError(ApiRequestFailedError):
    """現在の状態では操作できない（空でないコンテナの削除など）。"""


class UploadFailedError(ApiRequestFailedError):
    """アップロードに失敗した。"""
