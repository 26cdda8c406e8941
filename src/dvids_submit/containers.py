"""Client facade wiring the transport, OAuth2 helper and resource services."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from dvids_submit.adapters.api_client import HttpxApiClient
from dvids_submit.adapters.oauth_client import OAuth2Flow, OAuthClient
from dvids_submit.app_logging import configure_logging
from dvids_submit.config import Settings, parse_scopes
from dvids_submit.domain.oauth import TokenResponse
from dvids_submit.errors import DvidsError
from dvids_submit.services.authors import AuthorService
from dvids_submit.services.batches import BatchService
from dvids_submit.services.graphics import GraphicService
from dvids_submit.services.photos import PhotoService
from dvids_submit.services.publications import PublicationService
from dvids_submit.services.service_units import ServiceUnitService


@dataclass
class DvidsClient:
    """Entry point exposing one service per API resource."""

    settings: Settings
    api_client: HttpxApiClient
    oauth: OAuthClient
    authors: AuthorService
    batches: BatchService
    graphics: GraphicService
    photos: PhotoService
    publications: PublicationService
    service_units: ServiceUnitService

    def with_access_token(self, access_token: str) -> "DvidsClient":
        """Return a new client authenticated with `access_token`.

        The new client shares this one's HTTP session.
        """
        settings = self.settings.model_copy(update={"access_token": access_token})
        api_client = self.api_client.with_access_token(access_token)
        return _wire(settings, api_client, self.oauth)

    def authorization_url(
        self, state: str | None = None, scopes: Sequence[str] | None = None
    ) -> str:
        """Build the authorization URL from the configured OAuth2 client."""
        client_id, redirect_uri = self._oauth_client_config()
        return self.oauth.authorization_url(
            client_id, redirect_uri, self._scopes(scopes), state
        )

    def create_oauth2_flow(self, scopes: Sequence[str] | None = None) -> OAuth2Flow:
        """Start an authorization flow with a random state value."""
        client_id, redirect_uri = self._oauth_client_config()
        return self.oauth.create_flow(client_id, redirect_uri, self._scopes(scopes))

    async def exchange_authorization_code(self, code: str) -> TokenResponse:
        """Trade a code for a token using the configured client credentials."""
        client_id, redirect_uri = self._oauth_client_config()
        if not self.settings.client_secret:
            raise DvidsError("DVIDS_CLIENT_SECRET is not configured")
        return await self.oauth.exchange_authorization_code(
            code, client_id, self.settings.client_secret, redirect_uri
        )

    async def aclose(self) -> None:
        """Close the HTTP sessions held by the client."""
        await self.api_client.aclose()
        if self.oauth.http_client is not self.api_client.http_client:
            await self.oauth.aclose()

    def _oauth_client_config(self) -> tuple[str, str]:
        if not self.settings.client_id or not self.settings.redirect_uri:
            raise DvidsError(
                "DVIDS_CLIENT_ID and DVIDS_REDIRECT_URI must be configured"
            )
        return self.settings.client_id, self.settings.redirect_uri

    def _scopes(self, scopes: Sequence[str] | None) -> tuple[str, ...]:
        if scopes is not None:
            return tuple(scopes)
        return parse_scopes(self.settings.scopes)


def build_client(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> DvidsClient:
    """Create a client from settings, optionally reusing an httpx session."""
    resolved_settings = settings or Settings()
    if resolved_settings.debug:
        configure_logging(logging.DEBUG)
    session = http_client or httpx.AsyncClient(
        timeout=resolved_settings.timeout, verify=resolved_settings.verify_ssl
    )
    api_client = HttpxApiClient(
        http_client=session,
        base_url=resolved_settings.base_url,
        access_token=resolved_settings.access_token,
        timeout=resolved_settings.timeout,
    )
    oauth = OAuthClient(
        http_client=session,
        auth_base_url=resolved_settings.auth_base_url,
        timeout=resolved_settings.timeout,
    )
    return _wire(resolved_settings, api_client, oauth)


def _wire(
    settings: Settings, api_client: HttpxApiClient, oauth: OAuthClient
) -> DvidsClient:
    batch_service = BatchService(api_client)
    service_unit_service = ServiceUnitService(api_client)
    author_service = AuthorService(api_client)
    return DvidsClient(
        settings=settings,
        api_client=api_client,
        oauth=oauth,
        authors=author_service,
        batches=batch_service,
        graphics=GraphicService(
            api_client=api_client,
            batch_service=batch_service,
            service_unit_service=service_unit_service,
            author_service=author_service,
        ),
        photos=PhotoService(
            api_client=api_client,
            batch_service=batch_service,
            service_unit_service=service_unit_service,
            author_service=author_service,
        ),
        publications=PublicationService(
            api_client=api_client, batch_service=batch_service
        ),
        service_units=service_unit_service,
    )
