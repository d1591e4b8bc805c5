"""Catalog search service."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Iterator

from spotify_catalog.client import SpotifyClient
from spotify_catalog.models.catalog import TrackInfo
from spotify_catalog.projections import track_info

logger = logging.getLogger(__name__)

# Order in which kinds are tried when no type is given.
SEARCH_KINDS = ("track", "album", "artist", "playlist")

_NOTHING = object()


class SearchService:
    """Service for the ``search`` endpoint."""

    def __init__(self, client: SpotifyClient) -> None:
        self._client = client

    def search(self, query: str, kind: str | None = None, **params: Any) -> Iterator[Any]:
        """Search the catalog, following pagination.

        With ``kind`` (track, album, artist, playlist, ...) only that kind is
        searched. Without it, each of SEARCH_KINDS is tried in turn and the
        results of the first one that returns anything are used; kinds are
        never merged.

        Extra keyword arguments become query parameters (e.g. ``limit=50``,
        ``market="GB"``). A ``type`` keyword is taken as ``kind``.
        """
        type_param = params.pop("type", None)
        if kind is None:
            kind = type_param
        if kind is not None:
            return self._search_kind(query, kind, params)
        return self._first_with_results(query, params)

    def search_info(self, query: str, **params: Any) -> Iterator[TrackInfo]:
        """Track name/artists for every track matching ``query``."""
        for track in self.search(query, "track", **params):
            yield track_info(track)

    def _search_kind(self, query: str, kind: str, params: dict[str, Any]) -> Iterator[Any]:
        spec = self._client.spec("search", [("q", query), ("type", kind), *params.items()])
        return self._client.paginate(spec, container_key=f"{kind}s")

    def _first_with_results(self, query: str, params: dict[str, Any]) -> Iterator[Any]:
        for kind in SEARCH_KINDS:
            results = self._search_kind(query, kind, params)
            first = next(results, _NOTHING)
            if first is _NOTHING:
                logger.info(f"No {kind} results for {query!r}, trying next kind")
                continue
            yield from itertools.chain([first], results)
            return
