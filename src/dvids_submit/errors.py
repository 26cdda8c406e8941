"""Error taxonomy for the DVIDS API and the status classification function."""

import json
from typing import Any


class DvidsError(Exception):
    """Base class for every error raised by the SDK."""


class ApiError(DvidsError):
    """Failed API call, carrying the HTTP status and the decoded error payload.

    A status code of 0 means the request never produced a response.
    """

    def __init__(
        self,
        message: str = "",
        status_code: int = 0,
        error_data: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_data = error_data

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code})"
        )


class BadRequestError(ApiError):
    """HTTP 400."""


class UnauthorizedError(ApiError):
    """HTTP 401."""


class AuthenticationError(ApiError):
    """HTTP 403: the token is valid but may not perform the action."""


ForbiddenError = AuthenticationError


class NotFoundError(ApiError):
    """HTTP 404."""


class ConflictError(ApiError):
    """HTTP 409."""


class InvalidResponseFormatError(DvidsError):
    """A successful response did not have the expected document shape."""


class EntityDecodeError(DvidsError, ValueError):
    """A JSON:API resource object could not be turned into an entity."""


class MissingAttributeError(EntityDecodeError):
    """A required attribute was absent or empty."""


class InvalidEnumValueError(EntityDecodeError):
    """An enumerated attribute held a value outside its variant set."""

    def __init__(self, enum_name: str, value: object) -> None:
        super().__init__(f"Invalid {enum_name} value: {value!r}")
        self.enum_name = enum_name
        self.value = value


class UnsupportedUploadError(DvidsError, NotImplementedError):
    """The batch upload asks for a transfer strategy the SDK cannot perform."""


class BatchClosedError(DvidsError):
    """Content was about to be attached to a batch that is already closed."""


class OAuthStateMismatchError(DvidsError):
    """The OAuth2 callback state differs from the one that was issued."""


_STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: AuthenticationError,
    404: NotFoundError,
    409: ConflictError,
}


def parse_error_body(body: str | bytes) -> Any:
    """Decode an error response body, returning None when it isn't JSON."""
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def extract_error_message(error_data: Any) -> str | None:
    """Join `title: detail` for every JSON:API error entry that has a title."""
    if not isinstance(error_data, dict):
        return None
    errors = error_data.get("errors")
    if not isinstance(errors, list):
        return None
    messages: list[str] = []
    for error in errors:
        if not isinstance(error, dict) or error.get("title") is None:
            continue
        message = str(error["title"])
        if error.get("detail") is not None:
            message = f"{message}: {error['detail']}"
        messages.append(message)
    return "; ".join(messages) or None


def classify_error(
    status_code: int, body: str | bytes, fallback_message: str | None = None
) -> ApiError:
    """Build the error matching an HTTP status and its response body."""
    error_data = parse_error_body(body)
    message = (
        extract_error_message(error_data)
        or fallback_message
        or f"HTTP {status_code} error"
    )
    error_class = _STATUS_ERRORS.get(status_code, ApiError)
    return error_class(message, status_code, error_data)


def transport_error(exc: Exception) -> ApiError:
    """Build the error for a request that never received a response."""
    return ApiError(f"HTTP request failed: {exc}", 0)
