"""Request description models passed between the client, builder and transport."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

Param = tuple[str, Any]


class Endpoint(BaseModel):
    """A path relative to the Web API base, e.g. ``playlists/<id>/tracks``."""
    path: str
    params: tuple[Param, ...] = ()

    model_config = {"frozen": True}


class RawURL(BaseModel):
    """An absolute URL, such as the ``next`` cursor of a collection page."""
    url: str
    params: tuple[Param, ...] = ()

    model_config = {"frozen": True}


class RequestSpec(BaseModel):
    """Logical description of one API call, before auth and URL resolution."""
    target: Endpoint | RawURL
    method: Literal["GET", "POST"] = "GET"
    body: str | None = None
    extra_headers: tuple[tuple[str, str], ...] = ()
    requires_auth: bool = True
    silent: bool | None = None

    model_config = {"frozen": True}

    def has_header(self, name: str) -> bool:
        name = name.lower()
        return any(key.lower() == name for key, _ in self.extra_headers)

    def with_target(self, url: str) -> RequestSpec:
        """Same request, pointed at ``url`` instead."""
        return self.model_copy(update={"target": RawURL(url=url)})


class HttpCall(BaseModel):
    """A fully resolved call, ready for the transport."""
    method: str
    url: str
    headers: dict[str, str]
    body: str | None = None
    silent: bool = True
