"""Tests for client facade wiring."""

import asyncio
import logging

import httpx
import pytest

from dvids_submit.config import Settings
from dvids_submit.containers import build_client
from dvids_submit.errors import DvidsError
from tests.conftest import BASE_URL, ScriptedApi, batch_data, document


def test_build_client_creates_services(settings: Settings) -> None:
    client = build_client(settings)

    assert client.api_client.base_url == BASE_URL
    assert client.oauth.auth_base_url == "https://auth.test"
    assert client.photos.batch_service is client.batches
    assert client.graphics.author_service is client.authors
    assert client.publications.batch_service is client.batches
    asyncio.run(client.aclose())
    assert client.api_client.http_client.is_closed


def test_with_access_token_builds_new_client(
    api: ScriptedApi, settings: Settings
) -> None:
    api.replies.append(document(batch_data(), 201))
    client = build_client(settings, http_client=api.http_client())

    authed = client.with_access_token("token-xyz")
    asyncio.run(authed.batches.create_batch())

    assert client.api_client.access_token is None
    assert client.settings.access_token is None
    assert authed.settings.access_token == "token-xyz"
    assert authed.batches.api_client is authed.api_client
    assert api.requests[0].headers["Authorization"] == "Bearer token-xyz"


def test_authorization_url_uses_configured_scopes(settings: Settings) -> None:
    client = build_client(settings.model_copy(update={"scopes": "basic upload"}))

    url = httpx.URL(client.authorization_url(state="s1"))

    assert url.params["client_id"] == "client-1"
    assert url.params["redirect_uri"] == "https://app.test/callback"
    assert url.params["scope"] == "basic upload"
    asyncio.run(client.aclose())


def test_oauth_requires_client_configuration(settings: Settings) -> None:
    client = build_client(settings.model_copy(update={"client_id": None}))

    with pytest.raises(DvidsError, match="DVIDS_CLIENT_ID"):
        client.create_oauth2_flow()
    asyncio.run(client.aclose())


def test_exchange_authorization_code_uses_settings(
    api: ScriptedApi, settings: Settings
) -> None:
    api.replies.append(httpx.Response(200, json={"access_token": "token-abc"}))
    client = build_client(settings, http_client=api.http_client())

    token = asyncio.run(client.exchange_authorization_code("code-1"))

    form = dict(httpx.QueryParams(api.requests[0].content.decode()))
    assert token.access_token == "token-abc"
    assert form["client_secret"] == "secret-1"
    assert form["redirect_uri"] == "https://app.test/callback"


def test_debug_settings_enable_debug_logging(settings: Settings) -> None:
    logger = logging.getLogger("dvids_submit")
    logger.handlers.clear()

    client = build_client(settings.model_copy(update={"debug": True}))

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    asyncio.run(client.aclose())
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
