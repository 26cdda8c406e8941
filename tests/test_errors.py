"""Tests for error classification."""

import asyncio

import httpx
import pytest

from dvids_submit.errors import (
    ApiError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    classify_error,
    extract_error_message,
)
from tests.conftest import ScriptedApi, error_document


@pytest.mark.parametrize(
    ("status_code", "error_class"),
    [
        (400, BadRequestError),
        (401, UnauthorizedError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (409, ConflictError),
        (500, ApiError),
        (418, ApiError),
    ],
)
def test_status_codes_map_to_error_classes(
    api: ScriptedApi, status_code: int, error_class: type[ApiError]
) -> None:
    api.replies.append(error_document(status_code, "Problem", "details here"))

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(api.api_client().get("/batch/b"))

    error = exc_info.value
    assert type(error) is error_class
    assert error.status_code == status_code
    assert error.message == "Problem: details here"
    assert error.error_data == {
        "errors": [{"title": "Problem", "detail": "details here"}]
    }


def test_multiple_errors_are_joined() -> None:
    error_data = {
        "errors": [
            {"title": "Invalid title", "detail": "too long"},
            {"title": "Missing country"},
            {"detail": "no title, skipped"},
        ]
    }

    assert (
        extract_error_message(error_data)
        == "Invalid title: too long; Missing country"
    )


def test_non_json_error_body_falls_back_to_status_message() -> None:
    error = classify_error(502, b"<html>Bad gateway</html>")

    assert type(error) is ApiError
    assert error.message == "HTTP 502 error"
    assert error.error_data is None


def test_transport_failure_has_status_zero(api: ScriptedApi) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api.replies.append(refuse)

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(api.api_client().get("/batch/b"))

    assert type(exc_info.value) is ApiError
    assert exc_info.value.status_code == 0
    assert exc_info.value.message == "HTTP request failed: connection refused"


def test_raised_status_errors_are_classified_the_same_way(api: ScriptedApi) -> None:
    async def raise_for_status(response: httpx.Response) -> None:
        response.raise_for_status()

    api.replies.append(error_document(404, "Not Found", "no such batch"))
    client = api.api_client().with_http_client(
        api.http_client(event_hooks={"response": [raise_for_status]})
    )

    with pytest.raises(NotFoundError) as exc_info:
        asyncio.run(client.get("/batch/missing"))

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Not Found: no such batch"
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)
