from __future__ import annotations

import httpx
import pytest

from selectel_storage.application.status_policy import (
    CONTAINER_INFO,
    CREATE_CONTAINER,
    DELETE_CONTAINER,
    LIST_CONTAINERS,
    POLICIES,
    UPLOAD_FILE,
    StatusOutcome,
    StatusPolicy,
    policy_for,
)
from selectel_storage.domain import (
    ApiRequestFailedError,
    ResourceAlreadyExistsError,
    ResourceConflictError,
    ResourceNotFoundError,
    UploadFailedError,
)


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (201, StatusOutcome.SUCCESS),
        (202, StatusOutcome.ALREADY_EXISTS),
        (500, StatusOutcome.FAILED),
    ],
)
def test_create_container_interpretation(status_code: int, expected: StatusOutcome) -> None:
    assert CREATE_CONTAINER.interpret(httpx.Response(status_code)) is expected


def test_create_container_conflict_raises_already_exists() -> None:
    with pytest.raises(ResourceAlreadyExistsError) as exc_info:
        CREATE_CONTAINER.ensure(httpx.Response(202), name="images")

    assert "images" in str(exc_info.value)
    assert exc_info.value.status_code == 202


def test_create_container_failure_raises_generic_error() -> None:
    with pytest.raises(ApiRequestFailedError) as exc_info:
        CREATE_CONTAINER.ensure(httpx.Response(500), name="images")

    assert type(exc_info.value) is ApiRequestFailedError
    assert exc_info.value.status_code == 500


def test_success_returns_outcome() -> None:
    assert LIST_CONTAINERS.ensure(httpx.Response(200)) is StatusOutcome.SUCCESS
    assert LIST_CONTAINERS.error_for(httpx.Response(200)) is None


@pytest.mark.parametrize(
    ("status_code", "error_cls"),
    [(404, ResourceNotFoundError), (409, ResourceConflictError), (503, ApiRequestFailedError)],
)
def test_delete_container_errors(status_code: int, error_cls: type[ApiRequestFailedError]) -> None:
    error = DELETE_CONTAINER.error_for(httpx.Response(status_code), name="images")

    assert type(error) is error_cls
    assert error is not None and error.status_code == status_code


def test_container_info_treats_any_failure_as_not_found() -> None:
    error = CONTAINER_INFO.error_for(httpx.Response(500), name="images")

    assert isinstance(error, ResourceNotFoundError)


def test_upload_failure_uses_upload_error() -> None:
    with pytest.raises(UploadFailedError):
        UPLOAD_FILE.ensure(httpx.Response(422))


def test_missing_message_context_is_left_as_placeholder() -> None:
    error = CREATE_CONTAINER.error_for(httpx.Response(202))

    assert error is not None
    assert "{name}" in str(error)


def test_policy_requires_success_status() -> None:
    with pytest.raises(ValueError):
        StatusPolicy(operation="broken", outcomes={404: StatusOutcome.NOT_FOUND}, failure_message="x")


def test_policy_lookup() -> None:
    assert policy_for("create_container") is CREATE_CONTAINER
    assert set(POLICIES) >= {"list_containers", "delete_file", "copy_file", "rename_file"}
    with pytest.raises(KeyError):
        policy_for("unknown")


@pytest.mark.parametrize(
    ("operation", "success_code"),
    [("read_file", 200), ("copy_file", 201), ("rename_file", 201), ("delete_file", 204)],
)
def test_file_policies_treat_missing_file_as_generic_failure(operation: str, success_code: int) -> None:
    policy = policy_for(operation)

    assert policy.interpret(httpx.Response(success_code)) is StatusOutcome.SUCCESS
    assert policy.interpret(httpx.Response(404)) is StatusOutcome.FAILED

    error = policy.error_for(httpx.Response(404), path="/container1/index.html")
    assert type(error) is ApiRequestFailedError
    assert error.status_code == 404
    assert "/container1/index.html" in str(error)
