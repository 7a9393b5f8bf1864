from __future__ import annotations

import threading
import time

import pytest

from selectel_storage.domain import (
    Authenticated,
    AuthenticationFailedError,
    SessionStore,
    Unauthenticated,
)


def test_session_store_starts_unauthenticated() -> None:
    store = SessionStore()

    assert isinstance(store.state, Unauthenticated)
    assert store.authenticated is False


def test_session_store_populates_once() -> None:
    store = SessionStore()
    calls: list[int] = []

    def authenticate() -> Authenticated:
        calls.append(1)
        return Authenticated(token="tok", storage_url="https://store.example/v1/acct")

    first = store.ensure(authenticate)
    second = store.ensure(authenticate)

    assert first is second
    assert store.state == Authenticated(token="tok", storage_url="https://store.example/v1/acct")
    assert len(calls) == 1


def test_session_store_stays_unauthenticated_on_failure() -> None:
    store = SessionStore()

    def authenticate() -> Authenticated:
        raise AuthenticationFailedError("bad credentials")

    with pytest.raises(AuthenticationFailedError):
        store.ensure(authenticate)

    assert isinstance(store.state, Unauthenticated)


def test_session_store_authenticates_once_under_concurrency() -> None:
    store = SessionStore()
    calls: list[int] = []
    barrier = threading.Barrier(8)

    def authenticate() -> Authenticated:
        calls.append(1)
        time.sleep(0.05)
        return Authenticated(token="tok", storage_url="https://store.example")

    def worker() -> None:
        barrier.wait()
        store.ensure(authenticate)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert store.authenticated is True


@pytest.mark.parametrize(
    ("token", "storage_url"),
    [("", "https://store.example"), ("tok", "")],
)
def test_authenticated_requires_both_values(token: str, storage_url: str) -> None:
    with pytest.raises(ValueError):
        Authenticated(token=token, storage_url=storage_url)


def test_authenticated_repr_hides_token() -> None:
    session = Authenticated(token="secret-token", storage_url="https://store.example")

    assert "secret-token" not in repr(session)
