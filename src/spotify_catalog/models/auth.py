"""Auth-related data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class TokenResponse(BaseModel):
    """Response from the Spotify client-credentials token endpoint."""
    access_token: str
    token_type: str
    expires_in: int


class Credential(BaseModel):
    """An access token plus the instant it stops being valid.

    Immutable: renewal produces a new Credential.
    """
    access_token: str
    token_type: str = "Bearer"
    expires_at: datetime | None = None

    model_config = {"frozen": True}

    def is_expired(self, now: datetime) -> bool:
        """A credential expiring exactly at ``now`` counts as expired."""
        return self.expires_at is not None and now >= self.expires_at

    @property
    def authorization(self) -> str:
        return f"Bearer {self.access_token}"


class TokenStatus(BaseModel):
    """Current state of a credential."""
    has_token: bool
    is_expired: bool
    expires_at: datetime | None = None
    seconds_remaining: int | None = None
