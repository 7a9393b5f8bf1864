"""
ステータスコードから操作結果への対応表。

ディスパッチャは 2xx 以外の応答も例外にせず返すため、上位の各操作は
ここで定義する対応表に従ってステータスコードを解釈する。対応表は
純粋な値であり、状態を持たない。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Protocol

from ..domain import (
    ApiRequestFailedError,
    ResourceAlreadyExistsError,
    ResourceConflictError,
    ResourceNotFoundError,
    SelectelStorageError,
    UploadFailedError,
)


class StatusOutcome(str, Enum):
    """ステータスコードを解釈した結果。"""

    SUCCESS = "success"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FAILED = "failed"


class _HasStatusCode(Protocol):
    @property
    def status_code(self) -> int:
        ...


class _MessageContext(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


_OUTCOME_ERRORS: Mapping[StatusOutcome, type[ApiRequestFailedError]] = {
    StatusOutcome.ALREADY_EXISTS: ResourceAlreadyExistsError,
    StatusOutcome.NOT_FOUND: ResourceNotFoundError,
    StatusOutcome.CONFLICT: ResourceConflictError,
}


@dataclass(frozen=True)
class StatusPolicy:
    """
    1 つの操作について、期待するステータスコードとその意味を定義する。

    Attributes:
        operation: 操作名。
        outcomes: ステータスコードと結果の対応。未定義のコードは FAILED とみなす。
        failure_message: FAILED 時のエラーメッセージ。
        failure_error: FAILED 時に送出する例外クラス。
        messages: FAILED 以外の失敗結果ごとのメッセージ。
    """

    operation: str
    outcomes: Mapping[int, StatusOutcome]
    failure_message: str
    failure_error: type[ApiRequestFailedError] = ApiRequestFailedError
    messages: Mapping[StatusOutcome, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if StatusOutcome.SUCCESS not in self.outcomes.values():
            raise ValueError(f"{self.operation} の対応表に成功ステータスがありません。")

    def interpret(self, response: _HasStatusCode) -> StatusOutcome:
        return self.outcomes.get(response.status_code, StatusOutcome.FAILED)

    def error_for(self, response: _HasStatusCode, **context: str) -> SelectelStorageError | None:
        """
        応答に対応する例外を返す。成功であれば ``None``。
        """

        outcome = self.interpret(response)
        if outcome is StatusOutcome.SUCCESS:
            return None

        template = self.messages.get(outcome, self.failure_message)
        message = template.format_map(_MessageContext(context))
        error_cls = _OUTCOME_ERRORS.get(outcome, self.failure_error)
        return error_cls(message, response.status_code)

    def ensure(self, response: _HasStatusCode, **context: str) -> StatusOutcome:
        """
        応答が成功であることを検証する。

        Raises:
            ApiRequestFailedError: 成功以外のステータスコードだった場合（結果に応じたサブクラス）。
        """

        error = self.error_for(response, **context)
        if error is not None:
            raise error
        return StatusOutcome.SUCCESS


LIST_CONTAINERS = StatusPolicy(
    operation="list_containers",
    outcomes={200: StatusOutcome.SUCCESS},
    failure_message="コンテナ一覧を取得できませんでした。",
)

CREATE_CONTAINER = StatusPolicy(
    operation="create_container",
    outcomes={201: StatusOutcome.SUCCESS, 202: StatusOutcome.ALREADY_EXISTS},
    failure_message='コンテナ "{name}" を作成できませんでした。',
    messages={StatusOutcome.ALREADY_EXISTS: 'コンテナ "{name}" は既に存在します。'},
)

CONTAINER_INFO = StatusPolicy(
    operation="container_info",
    outcomes={204: StatusOutcome.SUCCESS, 404: StatusOutcome.NOT_FOUND},
    failure_message='コンテナ "{name}" が見つかりません。',
    failure_error=ResourceNotFoundError,
)

DELETE_CONTAINER = StatusPolicy(
    operation="delete_container",
    outcomes={204: StatusOutcome.SUCCESS, 404: StatusOutcome.NOT_FOUND, 409: StatusOutcome.CONFLICT},
    failure_message='コンテナ "{name}" を削除できませんでした。',
    messages={
        StatusOutcome.NOT_FOUND: 'コンテナ "{name}" が見つかりません。',
        StatusOutcome.CONFLICT: "コンテナを削除するには空である必要があります。",
    },
)

LIST_FILES = StatusPolicy(
    operation="list_files",
    outcomes={200: StatusOutcome.SUCCESS},
    failure_message="コンテナ内のファイル一覧を取得できませんでした。",
)

UPLOAD_FILE = StatusPolicy(
    operation="upload_file",
    outcomes={201: StatusOutcome.SUCCESS},
    failure_message="ファイルをアップロードできませんでした。",
    failure_error=UploadFailedError,
)

READ_FILE = StatusPolicy(
    operation="read_file",
    outcomes={200: StatusOutcome.SUCCESS},
    failure_message='ファイル "{path}" を読み込めませんでした。',
)

COPY_FILE = StatusPolicy(
    operation="copy_file",
    outcomes={201: StatusOutcome.SUCCESS},
    failure_message='ファイル "{path}" をコピーできませんでした。',
)

RENAME_FILE = StatusPolicy(
    operation="rename_file",
    outcomes={201: StatusOutcome.SUCCESS},
    failure_message='ファイル "{path}" の名前を変更できませんでした。',
)

DELETE_FILE = StatusPolicy(
    operation="delete_file",
    outcomes={204: StatusOutcome.SUCCESS},
    failure_message='ファイル "{path}" を削除できませんでした。',
)

POLICIES: Mapping[str, StatusPolicy] = {
    policy.operation: policy
    for policy in (
        LIST_CONTAINERS,
        CREATE_CONTAINER,
        CONTAINER_INFO,
        DELETE_CONTAINER,
        LIST_FILES,
        UPLOAD_FILE,
        READ_FILE,
        COPY_FILE,
        RENAME_FILE,
        DELETE_FILE,
    )
}


def policy_for(operation: str) -> StatusPolicy:
    try:
        return POLICIES[operation]
    except KeyError as exc:
        raise KeyError(f"操作 '{operation}' の対応表は定義されていません。") from exc
