"""
ストレージ API との通信層。
"""

from .authenticator import Authenticator
from .client import ApiClient
from .outcome import DispatchOutcome, StructuredResponse, UnrecoveredFault
from .settings import ApiClientSettings

__all__ = [
    "ApiClient",
    "ApiClientSettings",
    "Authenticator",
    "DispatchOutcome",
    "StructuredResponse",
    "UnrecoveredFault",
]
