"""
ストレージ API へ送るリクエストパラメータ。
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import IO, Iterable, Mapping, Union

RequestBody = Union[bytes, str, IO[bytes], Iterable[bytes]]

FORMAT_PARAM = "format"
FORMAT_JSON = "json"


@dataclass(frozen=True)
class RequestParameters:
    """1 回のリクエストを表す値オブジェクト。"""

    method: str
    path: str
    query: Mapping[str, str | int] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    body: RequestBody | None = None

    def __post_init__(self) -> None:
        if not self.method:
            raise ValueError("method は必須です。")
        object.__setattr__(self, "method", self.method.upper())

    def with_forced_format(self) -> "RequestParameters":
        """
        クエリに ``format=json`` を強制設定したコピーを返す。

        呼び出し側が同じキーを指定していても上書きする。
        """

        query = dict(self.query or {})
        query[FORMAT_PARAM] = FORMAT_JSON
        return replace(self, query=query)
