"""
認証情報のドメインエンティティ。
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_AUTH_URL = "https://auth.selcdn.ru"


@dataclass(frozen=True)
class Credentials:
    """
    認証エンドポイントへ送るユーザー名・パスワードと接続先。

    生成後に変更されることはない。
    """

    username: str
    password: str = field(repr=False)
    auth_url: str = DEFAULT_AUTH_URL

    def __post_init__(self) -> None:
        if not self.username:
            raise ValueError("username は必須です。")
        if not self.password:
            raise ValueError("password は必須です。")
        if not self.auth_url:
            raise ValueError("auth_url は必須です。")
