"""OAuth2 authorization code flow against the DVIDS auth server."""

import secrets
from collections.abc import Sequence
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from dvids_submit.adapters.api_client import decode_response, send_request
from dvids_submit.config import DEFAULT_AUTH_BASE_URL
from dvids_submit.domain.oauth import TokenResponse
from dvids_submit.errors import InvalidResponseFormatError, OAuthStateMismatchError

DEFAULT_SCOPES = ("basic", "email", "upload")


@dataclass(frozen=True)
class OAuthClient:
    """Builds authorization URLs and exchanges codes for access tokens."""

    http_client: httpx.AsyncClient
    auth_base_url: str = DEFAULT_AUTH_BASE_URL
    timeout: float = 30.0

    @classmethod
    def create(
        cls, auth_base_url: str = DEFAULT_AUTH_BASE_URL, timeout: float = 30.0
    ) -> "OAuthClient":
        """Create an OAuth client with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(timeout=timeout),
            auth_base_url=auth_base_url,
            timeout=timeout,
        )

    def authorization_url(
        self,
        client_id: str,
        redirect_uri: str,
        scopes: Sequence[str] = DEFAULT_SCOPES,
        state: str | None = None,
    ) -> str:
        """Return the URL the user visits to grant access."""
        params = {
            "response_type": "code",
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "scope": " ".join(scopes),
        }
        if state is not None:
            params["state"] = state
        url = httpx.URL(
            f"{self.auth_base_url.rstrip('/')}/auth/authorize", params=params
        )
        return str(url)

    async def exchange_authorization_code(
        self,
        code: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> TokenResponse:
        """Trade an authorization code for an access token."""
        request = self.http_client.build_request(
            "POST",
            f"{self.auth_base_url.rstrip('/')}/auth/access_token",
            data={
                "grant_type": "authorization_code",
                "code": code,
                "client_id": client_id,
                "client_secret": client_secret,
                "redirect_uri": redirect_uri,
            },
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        response = await send_request(self.http_client, request)
        payload = decode_response(response)
        try:
            return TokenResponse.model_validate(payload)
        except ValidationError as exc:
            raise InvalidResponseFormatError("Invalid access token response") from exc

    def create_flow(
        self,
        client_id: str,
        redirect_uri: str,
        scopes: Sequence[str] = DEFAULT_SCOPES,
    ) -> "OAuth2Flow":
        """Start a flow with a random state value for CSRF protection."""
        state = secrets.token_hex(16)
        return OAuth2Flow(
            oauth_client=self,
            authorization_url=self.authorization_url(
                client_id, redirect_uri, scopes, state
            ),
            state=state,
            client_id=client_id,
            redirect_uri=redirect_uri,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


@dataclass(frozen=True)
class OAuth2Flow:
    """A pending authorization: where to send the user and how to finish."""

    oauth_client: OAuthClient
    authorization_url: str
    state: str
    client_id: str
    redirect_uri: str

    async def exchange_token(
        self,
        code: str,
        client_secret: str,
        received_state: str | None = None,
    ) -> TokenResponse:
        """Finish the flow, rejecting a callback whose state doesn't match."""
        if received_state is not None and received_state != self.state:
            raise OAuthStateMismatchError(
                "Invalid state parameter - possible CSRF attack"
            )
        return await self.oauth_client.exchange_authorization_code(
            code, self.client_id, client_secret, self.redirect_uri
        )
