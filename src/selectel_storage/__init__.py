"""
Selectel Cloud Storage 向けの認証付きリクエストクライアント。
"""

from .application.status_policy import StatusOutcome, StatusPolicy, policy_for
from .domain import (
    DEFAULT_AUTH_URL,
    ApiRequestFailedError,
    Authenticated,
    AuthenticationFailedError,
    AuthError,
    Credentials,
    MissingStorageEndpointError,
    RequestParameters,
    ResourceAlreadyExistsError,
    ResourceConflictError,
    ResourceNotFoundError,
    SelectelStorageError,
    Unauthenticated,
    UnrecoveredTransportError,
    UploadFailedError,
)
from .infrastructure.api import (
    ApiClient,
    ApiClientSettings,
    Authenticator,
    StructuredResponse,
    UnrecoveredFault,
)

__all__ = [
    "DEFAULT_AUTH_URL",
    "ApiClient",
    "ApiClientSettings",
    "Authenticator",
    "Credentials",
    "RequestParameters",
    "Authenticated",
    "Unauthenticated",
    "StructuredResponse",
    "UnrecoveredFault",
    "StatusOutcome",
    "StatusPolicy",
    "policy_for",
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
