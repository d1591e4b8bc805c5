"""Configuration management for spotify-catalog.

Loads client credentials from .env and optional endpoint overrides from
config/endpoints.yaml.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv

DEFAULT_API_BASE = "https://api.spotify.com/v1/"
DEFAULT_AUTH_ENDPOINT = "https://accounts.spotify.com/api/token"


class Endpoints(BaseModel):
    """Where the Web API and the token endpoint live."""
    api_base: str = DEFAULT_API_BASE
    auth_endpoint: str = DEFAULT_AUTH_ENDPOINT


class Settings(BaseModel):
    """Application settings loaded from environment variables."""
    client_id: str = Field(default="", description="Spotify application client ID")
    client_secret: str = Field(default="", description="Spotify application client secret")
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")


class Config(BaseModel):
    """Full application configuration."""
    settings: Settings
    endpoints: Endpoints = Endpoints()

    @property
    def has_credentials(self) -> bool:
        return bool(self.settings.client_id and self.settings.client_secret)


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where .env or config/ lives)."""
    current = Path(__file__).resolve().parent
    for parent in [current, *current.parents]:
        if (parent / "config" / "endpoints.yaml").exists() or (parent / ".env").exists():
            return parent
    # Fallback: cwd
    return Path.cwd()


def _load_endpoints(project_root: Path) -> Endpoints:
    """Load endpoint overrides from endpoints.yaml, if present."""
    endpoints_path = project_root / "config" / "endpoints.yaml"
    if not endpoints_path.exists():
        return Endpoints()

    with open(endpoints_path) as f:
        data = yaml.safe_load(f) or {}

    endpoints = Endpoints(**(data.get("endpoints") or {}))
    if not endpoints.api_base.endswith("/"):
        endpoints.api_base += "/"
    return endpoints


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _load_settings() -> Settings:
    """Load settings from environment variables.

    Supports both SPOTIFY_* and the SPOTIPY_* names used by spotipy.
    """
    return Settings(
        client_id=_env("SPOTIFY_CLIENT_ID", "SPOTIPY_CLIENT_ID"),
        client_secret=_env("SPOTIFY_CLIENT_SECRET", "SPOTIPY_CLIENT_SECRET"),
        timeout=float(_env("SPOTIFY_TIMEOUT", default="30")),
    )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load and cache the full application configuration."""
    project_root = _find_project_root()

    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Config(settings=_load_settings(), endpoints=_load_endpoints(project_root))
