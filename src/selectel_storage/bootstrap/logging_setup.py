"""
logging セクションを ``logging.config.dictConfig`` で適用する。
"""

from __future__ import annotations

import logging.config
from typing import Any, Mapping

from .container import InvalidConfigurationError, LoggingConfigurator

LOGGER_NAME = "selectel_storage"


def default_logging_config(level: str = "WARNING") -> dict[str, Any]:
    """``selectel_storage`` 配下のロガーだけを標準エラーへ出力する設定。"""

    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "standard", "level": level},
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["console"], "level": level, "propagate": False},
        },
    }


class DictConfigLoggingConfigurator(LoggingConfigurator):
    def configure(self, config: Mapping[str, Any]) -> None:
        if config.get("version") is None:
            raise InvalidConfigurationError("logging 設定には 'version' が必要です。")

        try:
            logging.config.dictConfig(_plain(config))
        except (ValueError, TypeError, AttributeError, ImportError) as exc:
            raise InvalidConfigurationError(f"logging 設定を適用できませんでした: {exc}") from exc


def _plain(value: Any) -> Any:
    # dictConfig は dict 以外の Mapping を設定として解釈しない
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value
