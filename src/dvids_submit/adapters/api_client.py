"""DVIDS content submission API client."""

import logging
import os
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import IO, Any, Protocol

import httpx

from dvids_submit.config import DEFAULT_BASE_URL
from dvids_submit.errors import ApiError, classify_error, transport_error
from dvids_submit.version import user_agent

CONTENT_TYPE = "application/vnd.api+json"

_UPLOAD_CHUNK_SIZE = 64 * 1024

_logger = logging.getLogger(__name__)


class ApiClient(Protocol):
    """Interface for DVIDS API interactions."""

    async def get(
        self, endpoint: str, query: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send a GET request and return the decoded document."""

    async def post(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a POST request and return the decoded document."""

    async def put(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a PUT request and return the decoded document."""

    async def patch(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a PATCH request and return the decoded document."""

    async def delete(
        self, endpoint: str, query: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send a DELETE request and return the decoded document."""

    async def upload_file(
        self,
        upload_url: str,
        file_path: str | os.PathLike[str],
        content_type: str,
        extra_headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Stream a local file to a presigned upload URL."""


@dataclass(frozen=True)
class HttpxApiClient(ApiClient):
    """HTTPX-backed DVIDS API client.

    Instances are immutable: the `with_*` methods return configured copies
    and leave the original untouched. Copies share the underlying
    `httpx.AsyncClient`, which only owns connections. TLS verification
    belongs to that client and is fixed when it is built.
    """

    http_client: httpx.AsyncClient
    base_url: str = DEFAULT_BASE_URL
    access_token: str | None = None
    default_headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = 30.0

    @classmethod
    def create(
        cls,
        base_url: str = DEFAULT_BASE_URL,
        access_token: str | None = None,
        default_headers: Mapping[str, str] | None = None,
        timeout: float = 30.0,
        verify_ssl: bool = True,
    ) -> "HttpxApiClient":
        """Create an API client with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(timeout=timeout, verify=verify_ssl),
            base_url=base_url,
            access_token=access_token,
            default_headers=dict(default_headers or {}),
            timeout=timeout,
        )

    def with_access_token(self, access_token: str) -> "HttpxApiClient":
        """Return a copy that authenticates with the given bearer token."""
        return replace(self, access_token=access_token)

    def with_base_url(self, base_url: str) -> "HttpxApiClient":
        """Return a copy that talks to another API host."""
        return replace(self, base_url=base_url)

    def with_headers(self, headers: Mapping[str, str]) -> "HttpxApiClient":
        """Return a copy whose default headers are extended by `headers`."""
        return replace(self, default_headers={**self.default_headers, **headers})

    def with_timeout(self, timeout: float) -> "HttpxApiClient":
        """Return a copy with another per-request timeout."""
        return replace(self, timeout=timeout)

    def with_http_client(self, http_client: httpx.AsyncClient) -> "HttpxApiClient":
        """Return a copy that sends requests through another httpx client."""
        return replace(self, http_client=http_client)

    async def get(
        self, endpoint: str, query: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send a GET request."""
        return await self._request("GET", endpoint, query=query)

    async def post(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a POST request."""
        return await self._request("POST", endpoint, data=data, query=query)

    async def put(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a PUT request."""
        return await self._request("PUT", endpoint, data=data, query=query)

    async def patch(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a PATCH request."""
        return await self._request("PATCH", endpoint, data=data, query=query)

    async def delete(
        self, endpoint: str, query: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send a DELETE request."""
        return await self._request("DELETE", endpoint, query=query)

    async def upload_file(
        self,
        upload_url: str,
        file_path: str | os.PathLike[str],
        content_type: str,
        extra_headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """PUT a local file to a presigned upload URL.

        The upload URL authorizes the transfer on its own, so the API bearer
        token is stripped from the request even if the httpx client carries it.
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("rb") as handle:
            headers = {
                "Content-Type": content_type,
                "Content-Length": str(os.fstat(handle.fileno()).st_size),
                "User-Agent": user_agent(),
                **(extra_headers or {}),
            }
            request = self.http_client.build_request(
                "PUT",
                upload_url,
                content=_iter_file(handle),
                headers=headers,
                timeout=self.timeout,
            )
            request.headers.pop("Authorization", None)
            response = await send_request(self.http_client, request)

        _logger.debug(
            "DVIDS upload %s to %s -> %s",
            path.name,
            request.url.host,
            response.status_code,
        )
        return decode_response(response)

    async def aclose(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        request = self.http_client.build_request(
            method,
            self._url(endpoint),
            params=dict(query) if query else None,
            json=dict(data) if data else None,
            headers=self._headers(),
            timeout=self.timeout,
        )
        response = await send_request(self.http_client, request)
        _logger.debug(
            "DVIDS %s %s -> %s", method, request.url.path, response.status_code
        )
        return decode_response(response)

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": CONTENT_TYPE,
            "Accept": CONTENT_TYPE,
            "User-Agent": user_agent(),
            **self.default_headers,
        }
        if self.access_token is not None:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers


async def send_request(
    http_client: httpx.AsyncClient, request: httpx.Request
) -> httpx.Response:
    """Send a request, translating httpx failures into API errors."""
    try:
        return await http_client.send(request)
    except httpx.HTTPStatusError as exc:
        body = await _read_body(exc.response)
        raise classify_error(exc.response.status_code, body, str(exc)) from exc
    except httpx.HTTPError as exc:
        raise transport_error(exc) from exc


def decode_response(response: httpx.Response) -> dict[str, Any]:
    """Return the decoded body of a successful response or raise its error."""
    if response.status_code >= 400:
        raise classify_error(response.status_code, response.content)
    if not response.content.strip():
        return {}
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(
            f"Invalid JSON response: {exc}", response.status_code
        ) from exc


async def _read_body(response: httpx.Response) -> bytes:
    """Read an error response body that may not have been loaded yet."""
    try:
        return await response.aread()
    except (httpx.HTTPError, httpx.StreamError):
        return b""


async def _iter_file(handle: IO[bytes]) -> AsyncIterator[bytes]:
    while chunk := handle.read(_UPLOAD_CHUNK_SIZE):
        yield chunk
