"""Tests for the OAuth2 authorization code helper."""

import asyncio
import re

import httpx
import pytest

from dvids_submit.adapters.oauth_client import OAuthClient
from dvids_submit.errors import (
    InvalidResponseFormatError,
    OAuthStateMismatchError,
    UnauthorizedError,
)
from tests.conftest import ScriptedApi, error_document

AUTH_BASE_URL = "https://auth.test"


def _oauth_client(api: ScriptedApi) -> OAuthClient:
    return OAuthClient(http_client=api.http_client(), auth_base_url=AUTH_BASE_URL)


def test_authorization_url_contains_query(api: ScriptedApi) -> None:
    url = httpx.URL(
        _oauth_client(api).authorization_url(
            "client-1", "https://app.test/callback", ["basic", "upload"], "xyz"
        )
    )

    assert url.host == "auth.test"
    assert url.path == "/auth/authorize"
    assert dict(url.params) == {
        "response_type": "code",
        "client_id": "client-1",
        "redirect_uri": "https://app.test/callback",
        "scope": "basic upload",
        "state": "xyz",
    }


def test_authorization_url_omits_missing_state(api: ScriptedApi) -> None:
    url = httpx.URL(
        _oauth_client(api).authorization_url("client-1", "https://app.test/callback")
    )

    assert "state" not in url.params
    assert url.params["scope"] == "basic email upload"


def test_exchange_posts_form_and_parses_token(api: ScriptedApi) -> None:
    api.replies.append(
        httpx.Response(
            200,
            json={
                "access_token": "token-abc",
                "token_type": "Bearer",
                "expires_in": 3600,
                "scope": "basic upload",
                "extra": "kept",
            },
        )
    )

    token = asyncio.run(
        _oauth_client(api).exchange_authorization_code(
            "code-1", "client-1", "secret-1", "https://app.test/callback"
        )
    )

    request = api.requests[0]
    assert str(request.url) == f"{AUTH_BASE_URL}/auth/access_token"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert dict(httpx.QueryParams(request.content.decode())) == {
        "grant_type": "authorization_code",
        "code": "code-1",
        "client_id": "client-1",
        "client_secret": "secret-1",
        "redirect_uri": "https://app.test/callback",
    }
    assert token.access_token == "token-abc"
    assert token.expires_in == 3600
    assert token.scopes == ("basic", "upload")
    assert token.model_extra == {"extra": "kept"}


def test_exchange_rejects_token_response_without_access_token(
    api: ScriptedApi,
) -> None:
    api.replies.append(httpx.Response(200, json={"token_type": "Bearer"}))

    with pytest.raises(InvalidResponseFormatError):
        asyncio.run(
            _oauth_client(api).exchange_authorization_code(
                "code-1", "client-1", "secret-1", "https://app.test/callback"
            )
        )


def test_exchange_error_is_classified(api: ScriptedApi) -> None:
    api.replies.append(error_document(401, "invalid_client", "bad secret"))

    with pytest.raises(UnauthorizedError):
        asyncio.run(
            _oauth_client(api).exchange_authorization_code(
                "code-1", "client-1", "wrong", "https://app.test/callback"
            )
        )


def test_flow_state_is_random_hex(api: ScriptedApi) -> None:
    client = _oauth_client(api)

    first = client.create_flow("client-1", "https://app.test/callback")
    second = client.create_flow("client-1", "https://app.test/callback")

    assert re.fullmatch(r"[0-9a-f]{32}", first.state)
    assert first.state != second.state
    assert httpx.URL(first.authorization_url).params["state"] == first.state


def test_flow_rejects_mismatched_state(api: ScriptedApi) -> None:
    flow = _oauth_client(api).create_flow("client-1", "https://app.test/callback")

    with pytest.raises(OAuthStateMismatchError):
        asyncio.run(flow.exchange_token("code-1", "secret-1", "forged"))

    assert api.requests == []


def test_flow_exchanges_with_matching_state(api: ScriptedApi) -> None:
    api.replies.append(httpx.Response(200, json={"access_token": "token-abc"}))
    flow = _oauth_client(api).create_flow("client-1", "https://app.test/callback")

    token = asyncio.run(flow.exchange_token("code-1", "secret-1", flow.state))

    assert token.access_token == "token-abc"
    assert token.token_type == "Bearer"
