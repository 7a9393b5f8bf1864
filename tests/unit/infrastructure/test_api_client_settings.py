from __future__ import annotations

import pytest

from selectel_storage.domain import DEFAULT_AUTH_URL
from selectel_storage.infrastructure.api import ApiClientSettings


def test_settings_from_mapping_applies_defaults() -> None:
    settings = ApiClientSettings.from_mapping({"username": "user", "password": "pass"})

    assert settings.auth_url == DEFAULT_AUTH_URL
    assert settings.timeout_seconds == 30.0
    assert settings.verify_ssl is True


def test_settings_from_mapping_parses_strings() -> None:
    settings = ApiClientSettings.from_mapping(
        {
            "username": "user",
            "password": "pass",
            "auth_url": "https://auth.example",
            "timeout_seconds": "2.5",
            "verify_ssl": "false",
        }
    )

    assert settings.auth_url == "https://auth.example"
    assert settings.timeout_seconds == 2.5
    assert settings.verify_ssl is False


@pytest.mark.parametrize(
    "mapping",
    [
        {"password": "pass"},
        {"username": "", "password": "pass"},
        {"username": "user"},
        {"username": "user", "password": "pass", "timeout_seconds": 0},
        {"username": "user", "password": "pass", "timeout_seconds": "abc"},
        {"username": "user", "password": "pass", "timeout_seconds": True},
    ],
)
def test_settings_from_mapping_rejects_invalid_values(mapping: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        ApiClientSettings.from_mapping(mapping)


def test_settings_to_credentials() -> None:
    settings = ApiClientSettings(username="user", password="pass", auth_url="https://auth.example")

    credentials = settings.to_credentials()

    assert credentials.username == "user"
    assert credentials.password == "pass"
    assert credentials.auth_url == "https://auth.example"
    assert "pass" not in repr(settings)
