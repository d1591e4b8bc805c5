"""Shared fixtures for the spotify-catalog test suite."""
from __future__ import annotations

import json
from datetime import datetime

import pytest

from spotify_catalog.auth import TokenManager
from spotify_catalog.client import SpotifyClient
from spotify_catalog.config import Config, Endpoints, Settings
from spotify_catalog.utils.errors import TransportError

T0 = datetime(2026, 1, 1, 12, 0, 0)


class FakeTransport:
    """Records every call and replays queued responses in order.

    A queued str is returned as the body, a dict/list is JSON-encoded, and an
    exception instance is raised.
    """

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.calls: list[dict] = []
        self.closed = False

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    def execute(self, method, url, headers, body=None, silent=True):
        self.calls.append(
            {"method": method, "url": url, "headers": dict(headers), "body": body, "silent": silent}
        )
        if not self.responses:
            raise TransportError(f"unexpected call: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return response
        return json.dumps(response)

    def close(self) -> None:
        self.closed = True

    @property
    def urls(self) -> list[str]:
        return [c["url"] for c in self.calls]


class FakeClock:
    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def token_body(access_token="AT", expires_in=3600, token_type="Bearer") -> dict:
    return {"access_token": access_token, "token_type": token_type, "expires_in": expires_in}


@pytest.fixture
def fake_settings() -> Settings:
    return Settings(client_id="test-client-id", client_secret="test-client-secret", timeout=5.0)


@pytest.fixture
def fake_config(fake_settings) -> Config:
    return Config(settings=fake_settings, endpoints=Endpoints())


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tokens(fake_config, transport, clock) -> TokenManager:
    return TokenManager(fake_config, transport, clock=clock)


@pytest.fixture
def client(fake_config, transport, tokens) -> SpotifyClient:
    return SpotifyClient(fake_config, transport=transport, token_manager=tokens)
