"""
認証セッションの状態。

状態は ``Unauthenticated`` と ``Authenticated`` の二値のみで、
トークンとストレージ URL の片方だけを保持する中間状態は存在しない。
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Union


@dataclass(frozen=True)
class Unauthenticated:
    """まだ認証が行われていない状態。"""


@dataclass(frozen=True)
class Authenticated:
    """認証済みの状態。トークンとストレージ URL を必ず両方持つ。"""

    token: str = field(repr=False)
    storage_url: str

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("token は必須です。")
        if not self.storage_url:
            raise ValueError("storage_url は必須です。")


SessionState = Union[Unauthenticated, Authenticated]


class SessionStore:
    """
    クライアント 1 インスタンスが専有するセッション保持領域。

    ``Unauthenticated`` から ``Authenticated`` への遷移は一度だけ行われ、
    以後リセットされない。遷移はロックで保護される。
    """

    def __init__(self) -> None:
        self._state: SessionState = Unauthenticated()
        self._lock = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def authenticated(self) -> bool:
        return isinstance(self._state, Authenticated)

    def ensure(self, authenticate: Callable[[], Authenticated]) -> Authenticated:
        """
        未認証であれば ``authenticate`` を呼び出して状態を確定させる。

        ``authenticate`` が例外を送出した場合、状態は ``Unauthenticated`` のまま残る。
        """

        state = self._state
        if isinstance(state, Authenticated):
            return state

        with self._lock:
            state = self._state
            if isinstance(state, Authenticated):
                return state
            session = authenticate()
            self._state = session
            return session
