"""
インフラ層のパッケージ初期化。
"""

from .api import (
    ApiClient,
    ApiClientSettings,
    Authenticator,
    DispatchOutcome,
    StructuredResponse,
    UnrecoveredFault,
)

__all__ = [
    "ApiClient",
    "ApiClientSettings",
    "Authenticator",
    "DispatchOutcome",
    "StructuredResponse",
    "UnrecoveredFault",
]
