"""Turns a RequestSpec into a concrete HttpCall.

URL resolution, query-parameter appending, default flags, and bearer token
injection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable
from urllib.parse import urlencode, urlsplit, urlunsplit

from spotify_catalog.config import DEFAULT_API_BASE
from spotify_catalog.models.auth import Credential
from spotify_catalog.models.requests import Endpoint, HttpCall, Param, RequestSpec

if TYPE_CHECKING:
    from spotify_catalog.auth import TokenManager

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def add_params(url: str, params: Iterable[Param]) -> str:
    """Append query parameters after those already in ``url``.

    Existing parameters are kept as they are; nothing is de-duplicated.
    """
    params = list(params)
    if not params:
        return url

    parts = urlsplit(url)
    extra = urlencode(params)
    query = f"{parts.query}&{extra}" if parts.query else extra
    return urlunsplit(parts._replace(query=query))


def resolve_url(spec: RequestSpec, api_base: str = DEFAULT_API_BASE) -> str:
    target = spec.target
    if isinstance(target, Endpoint):
        return add_params(api_base + target.path.lstrip("/"), target.params)
    return add_params(target.url, target.params)


def build_call(spec: RequestSpec, api_base: str = DEFAULT_API_BASE) -> HttpCall:
    """Resolve everything except authorization."""
    headers = dict(spec.extra_headers)
    if spec.body is not None and not spec.has_header("Content-Type"):
        headers["Content-Type"] = FORM_CONTENT_TYPE

    return HttpCall(
        method=spec.method,
        url=resolve_url(spec, api_base),
        headers=headers,
        body=spec.body,
        silent=True if spec.silent is None else spec.silent,
    )


class RequestBuilder:
    """Builds authorized calls, renewing the credential when needed."""

    def __init__(self, token_manager: TokenManager, api_base: str = DEFAULT_API_BASE) -> None:
        self._tokens = token_manager
        self._api_base = api_base

    def build(
        self, spec: RequestSpec, credential: Credential | None
    ) -> tuple[HttpCall, Credential | None]:
        """Build the call for ``spec``.

        Returns the call plus the credential the caller should keep using:
        the renewed one if renewal happened, otherwise ``credential``.
        """
        call = build_call(spec, self._api_base)

        if spec.requires_auth and not spec.has_header("Authorization"):
            credential, _ = self._tokens.ensure_valid(credential)
            call.headers["Authorization"] = credential.authorization

        return call, credential
