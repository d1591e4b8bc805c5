"""API client for the Spotify Web API.

Wires the transport, token manager and request builder together, and
decodes responses.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator

from spotify_catalog.auth import TokenManager
from spotify_catalog.config import Config
from spotify_catalog.models.auth import Credential
from spotify_catalog.models.requests import Endpoint, Param, RequestSpec
from spotify_catalog.request_builder import RequestBuilder
from spotify_catalog.transport import HttpxTransport, Transport
from spotify_catalog.utils.pagination import Paginator

logger = logging.getLogger(__name__)


def decode_body(text: str) -> Any:
    """Decode a JSON body; anything that is not JSON is returned as-is."""
    try:
        return json.loads(text)
    except ValueError:
        logger.debug("Response body is not JSON, returning raw text")
        return text


class SpotifyClient:
    """HTTP client for the Spotify Web API.

    ``run`` and ``retrieve_all`` take and return credentials explicitly.
    ``get`` and ``paginate`` do the same with a credential kept on this
    instance, for callers that do not want to thread it themselves.
    """

    def __init__(
        self,
        config: Config,
        transport: Transport | None = None,
        token_manager: TokenManager | None = None,
        verbose: bool = False,
    ) -> None:
        self._config = config
        self._transport = transport or HttpxTransport(timeout=config.settings.timeout)
        self._tokens = token_manager or TokenManager(config, self._transport)
        self._builder = RequestBuilder(self._tokens, config.endpoints.api_base)
        self._verbose = verbose
        self.credential: Credential | None = None

    @property
    def tokens(self) -> TokenManager:
        return self._tokens

    def spec(
        self,
        endpoint: str,
        params: list[Param] | tuple[Param, ...] = (),
        **kwargs: Any,
    ) -> RequestSpec:
        """Describe a call to ``endpoint``, honouring the client's verbosity."""
        if self._verbose:
            kwargs.setdefault("silent", False)
        return RequestSpec(target=Endpoint(path=endpoint, params=tuple(params)), **kwargs)

    def run(
        self, spec: RequestSpec, credential: Credential | None = None
    ) -> tuple[Any, Credential | None]:
        """Execute one request.

        Returns:
            The decoded body (raw text if it is not JSON) and the credential
            to use for the next call.

        Raises:
            TransportError: The request or a needed token renewal failed.
            AuthResponseMalformed: Token renewal returned an unusable body.
        """
        call, credential = self._builder.build(spec, credential)
        text = self._transport.execute(call.method, call.url, call.headers, call.body, call.silent)
        return decode_body(text), credential

    def retrieve_all(
        self,
        spec: RequestSpec,
        credential: Credential | None = None,
        container_key: str | None = None,
    ) -> Paginator:
        """Lazily iterate every item of a paginated resource."""
        return Paginator(self.run, spec, credential, container_key)

    def get(self, endpoint: str, params: list[Param] | tuple[Param, ...] = ()) -> Any:
        """Single GET using the client's own credential."""
        value, self.credential = self.run(self.spec(endpoint, params), self.credential)
        return value

    def paginate(self, spec: RequestSpec, container_key: str | None = None) -> Iterator[Any]:
        """``retrieve_all`` using the client's own credential."""
        pages = self.retrieve_all(spec, self.credential, container_key)
        try:
            for item in pages:
                self.credential = pages.credential
                yield item
        finally:
            self.credential = pages.credential

    def close(self) -> None:
        """Close the underlying transport."""
        self._transport.close()
