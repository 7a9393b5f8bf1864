"""
ディスパッチ結果の型。

応答を伴うもの（ステータスコードを検査できる）と、応答を伴わない通信障害を
明示的に区別する。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import httpx

from ...domain import UnrecoveredTransportError


@dataclass(frozen=True)
class StructuredResponse:
    """ステータスコード付きの応答。2xx 以外もここに含まれる。"""

    response: httpx.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def unwrap(self) -> httpx.Response:
        return self.response


@dataclass(frozen=True)
class UnrecoveredFault:
    """応答を一切伴わない通信障害。"""

    cause: httpx.HTTPError
    method: str
    path: str

    def unwrap(self) -> httpx.Response:
        raise UnrecoveredTransportError(
            f"ストレージ API へのリクエストに失敗しました (method={self.method}, path={self.path})"
        ) from self.cause


DispatchOutcome = Union[StructuredResponse, UnrecoveredFault]
