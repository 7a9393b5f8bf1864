"""
ドメイン層のパッケージ初期化。
"""

from .credentials import DEFAULT_AUTH_URL, Credentials
from .exceptions import (
    ApiRequestFailedError,
    AuthenticationFailedError,
    AuthError,
    MissingStorageEndpointError,
    ResourceAlreadyExistsError,
    ResourceConflictError,
    ResourceNotFoundError,
    SelectelStorageError,
    UnrecoveredTransportError,
    UploadFailedError,
)
from .requests import RequestParameters
from .session import Authenticated, SessionState, SessionStore, Unauthenticated

__all__ = [
    "DEFAULT_AUTH_URL",
    "Credentials",
    "RequestParameters",
    "Authenticated",
    "Unauthenticated",
    "SessionState",
    "SessionStore",
    "SelectelStorageError",
    "AuthError",
    "AuthenticationFailedError",
    "MissingStorageEndpointError",
    "UnrecoveredTransportError",
    "ApiRequestFailedError",
    "ResourceAlreadyExistsError",
    "ResourceNotFoundError",
    "ResourceConflictError",
    "UploadFailedError",
]
