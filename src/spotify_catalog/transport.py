"""HTTP transport for the Spotify Web API.

The rest of the package only relies on the ``Transport`` protocol; tests
substitute their own implementation.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from spotify_catalog.utils.errors import TransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    def execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | None = None,
        silent: bool = True,
    ) -> str:
        """Perform one request and return the response body text."""
        ...

    def close(self) -> None:
        ...


class HttpxTransport:
    """Synchronous transport on top of ``httpx.Client``.

    No retries: any network failure or non-2xx status raises TransportError.
    """

    def __init__(self, timeout: float = 30.0, http: httpx.Client | None = None) -> None:
        self._http = http or httpx.Client(timeout=timeout)

    def execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | None = None,
        silent: bool = True,
    ) -> str:
        if not silent:
            logger.info(f"{method} {url}")
            if body:
                logger.info(f"Body: {body}")

        try:
            response = self._http.request(method, url, headers=headers, content=body)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not silent:
            logger.info(f"Response: {response.status_code}")

        if not response.is_success:
            raise TransportError(
                f"API error (HTTP {response.status_code}): {_error_detail(response)}",
                status_code=response.status_code,
            )

        return response.text

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()


def _error_detail(response: httpx.Response) -> str:
    """Pull the message out of a Web API or accounts-service error body."""
    try:
        error_json = response.json()
    except ValueError:
        return response.text

    if not isinstance(error_json, dict):
        return response.text

    error = error_json.get("error")
    if isinstance(error, dict):
        return error.get("message", response.text)
    if isinstance(error, str):
        description = error_json.get("error_description")
        return f"{error}: {description}" if description else error
    return response.text
