"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import pytest

from dvids_submit.adapters.api_client import HttpxApiClient
from dvids_submit.config import Settings

BASE_URL = "https://submitapi.test"
UPLOAD_URL = "https://s3.example.com/bucket/upload-123?signature=abc"

Reply = httpx.Response | Callable[[httpx.Request], httpx.Response]


@dataclass
class ScriptedApi:
    """Replays queued responses in order and records every request."""

    replies: list[Reply] = field(default_factory=list)
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError(f"Unexpected request {request.method} {request.url}")
        reply = self.replies.pop(0)
        return reply(request) if callable(reply) else reply

    def http_client(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self), **kwargs)

    def api_client(self, access_token: str | None = "token-123") -> HttpxApiClient:
        return HttpxApiClient(
            http_client=self.http_client(),
            base_url=BASE_URL,
            access_token=access_token,
        )

    @property
    def calls(self) -> list[tuple[str, str, str]]:
        return [
            (request.method, request.url.host, request.url.path)
            for request in self.requests
        ]


def document(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"data": data})


def error_document(status_code: int, title: str, detail: str) -> httpx.Response:
    return httpx.Response(
        status_code, json={"errors": [{"title": title, "detail": detail}]}
    )


def batch_data(batch_id: str = "batch-123", closed: bool = False) -> dict[str, Any]:
    return {
        "id": batch_id,
        "type": "batch",
        "attributes": {"created_at": "2024-10-01T12:00:00+00:00", "closed": closed},
    }


def batch_upload_data(
    upload_id: str = "upload-123", http_method: str = "PUT"
) -> dict[str, Any]:
    return {
        "id": upload_id,
        "type": "batch-upload",
        "attributes": {
            "upload_url": UPLOAD_URL,
            "http_method": http_method,
            "use_cdn": True,
        },
        "relationships": {
            "batch": {"data": {"id": "batch-123", "type": "batch"}},
        },
    }


def virin_data(virin: str = "241001-A-AB123-1001") -> dict[str, Any]:
    return {"type": "service-unit-virin", "attributes": {"virin": virin}}


def photo_data(photo_id: str = "photo-123") -> dict[str, Any]:
    return {
        "id": photo_id,
        "type": "photo",
        "attributes": {
            "title": "Training exercise",
            "description": "Soldiers train at dawn",
            "instructions": "None",
            "created_at": "2024-10-01T12:00:00+00:00",
            "virin": "241001-A-AB123-1001",
            "country": "US",
            "tags": ["training"],
            "status": "uploaded",
            "thumbnail_url_template": "https://cdn.test/{size}/photo-123.jpg",
        },
        "relationships": {
            "batch_upload": {"data": {"id": "upload-123", "type": "batch-upload"}},
            "service_unit": {"data": {"id": "unit-123", "type": "service-unit"}},
        },
    }


def graphic_data(graphic_id: str = "graphic-123") -> dict[str, Any]:
    return {
        "id": graphic_id,
        "type": "graphic",
        "attributes": {
            "title": "Safety poster",
            "description": "Hydration reminder",
            "instructions": "None",
            "created_at": "2024-10-01T12:00:00+00:00",
            "virin": "241001-A-AB123-1002",
            "country": "US",
            "status": "needs-approval",
        },
        "relationships": {
            "category": {"data": {"id": "cat-1", "type": "graphic-category"}},
        },
    }


@pytest.fixture
def api() -> ScriptedApi:
    return ScriptedApi()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        base_url=BASE_URL,
        auth_base_url="https://auth.test",
        access_token=None,
        client_id="client-1",
        client_secret="secret-1",
        redirect_uri="https://app.test/callback",
        scopes="basic,email,upload",
        debug=False,
    )


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"\xff\xd8fake-jpeg-bytes\xff\xd9")
    return path
