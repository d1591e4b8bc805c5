"""OAuth2 client-credentials authentication for the Spotify Web API.

Decides whether a credential can be reused and mints a new one when it
cannot. Credentials are passed in and handed back; nothing is cached here.
"""

from __future__ import annotations

import base64
import json
import logging
from datetime import datetime, timedelta
from typing import Callable

from pydantic import ValidationError

from spotify_catalog.config import Config
from spotify_catalog.models.auth import Credential, TokenResponse, TokenStatus
from spotify_catalog.models.requests import RawURL, RequestSpec
from spotify_catalog.request_builder import build_call
from spotify_catalog.transport import Transport
from spotify_catalog.utils.errors import AuthResponseMalformed, MissingCredentials

logger = logging.getLogger(__name__)

GRANT_BODY = "grant_type=client_credentials"


class TokenManager:
    """Mints and validates client-credentials access tokens."""

    def __init__(
        self,
        config: Config,
        transport: Transport,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config
        self._transport = transport
        self._clock = clock

    def ensure_valid(self, current: Credential | None) -> tuple[Credential, bool]:
        """Return a usable credential and whether it had to be renewed.

        Args:
            current: The credential the caller holds, if any.

        Returns:
            ``(current, False)`` while it is still valid, otherwise a freshly
            minted credential and ``True``.

        Raises:
            TransportError: The token request failed.
            AuthResponseMalformed: The token endpoint's answer was unusable.
        """
        if current is not None and not current.is_expired(self._clock()):
            return current, False
        return self.renew(), True

    def renew(self) -> Credential:
        """Request a new access token with the client-credentials grant."""
        # expires_at counts from before the round trip.
        now = self._clock()

        spec = RequestSpec(
            target=RawURL(url=self._config.endpoints.auth_endpoint),
            method="POST",
            body=GRANT_BODY,
            extra_headers=(("Authorization", self._basic_auth()),),
            requires_auth=False,
        )
        call = build_call(spec, self._config.endpoints.api_base)
        text = self._transport.execute(call.method, call.url, call.headers, call.body, call.silent)

        # Never echo the body: it may hold a live token.
        try:
            data = json.loads(text)
        except ValueError as e:
            raise AuthResponseMalformed("Token response is not valid JSON") from e
        try:
            token_data = TokenResponse.model_validate(data)
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise AuthResponseMalformed(
                f"Token response missing or invalid: {', '.join(fields) or 'not a JSON object'}"
            ) from e

        logger.info(f"Minted new access token (expires in {token_data.expires_in}s)")
        return Credential(
            access_token=token_data.access_token,
            token_type=token_data.token_type,
            expires_at=now + timedelta(seconds=token_data.expires_in),
        )

    def status(self, credential: Credential | None) -> TokenStatus:
        """Describe a credential without renewing it."""
        if credential is None:
            return TokenStatus(has_token=False, is_expired=True)

        now = self._clock()
        is_expired = credential.is_expired(now)
        seconds_remaining = None
        if credential.expires_at and not is_expired:
            seconds_remaining = int((credential.expires_at - now).total_seconds())

        return TokenStatus(
            has_token=True,
            is_expired=is_expired,
            expires_at=credential.expires_at,
            seconds_remaining=seconds_remaining,
        )

    def _basic_auth(self) -> str:
        settings = self._config.settings
        if not settings.client_id or not settings.client_secret:
            raise MissingCredentials(
                "No client id / client secret configured. Check your .env file."
            )
        raw = f"{settings.client_id}:{settings.client_secret}".encode()
        return "Basic " + base64.b64encode(raw).decode()
