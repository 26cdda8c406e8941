"""Models for OAuth2 token responses."""

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Access token issued by the DVIDS authorization server."""

    model_config = ConfigDict(extra="allow")

    access_token: str = Field(min_length=1)
    token_type: str = "Bearer"
    expires_in: int | None = Field(default=None, ge=0)
    refresh_token: str | None = None
    scope: str | None = None

    @property
    def scopes(self) -> tuple[str, ...]:
        """Granted scopes as a tuple."""
        return tuple((self.scope or "").split())
