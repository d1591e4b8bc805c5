"""Pagination helpers for the Spotify Web API.

Collection responses look like ``{"items": [...], "next": <url or null>}``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator

from pydantic import ValidationError

from spotify_catalog.models.auth import Credential
from spotify_catalog.models.catalog import CollectionPage
from spotify_catalog.models.requests import RequestSpec

logger = logging.getLogger(__name__)

FetchFn = Callable[[RequestSpec, Credential | None], tuple[Any, Credential | None]]

_MISSING = object()


def as_collection_page(value: Any) -> CollectionPage | None:
    """Decode ``value`` as a collection page, or None if it is not one."""
    try:
        return CollectionPage.model_validate(value)
    except ValidationError:
        return None


class Paginator:
    """Lazily yields every item of a paginated resource.

    A page is only requested once the items of the previous one have been
    consumed, so stopping iteration early never issues the next request.
    The latest credential is available as ``credential`` at every step.

    Args:
        fetch: Performs one request: ``fetch(spec, credential) -> (value, credential)``.
        spec: The request for the first page.
        credential: The credential to start with, if any.
        container_key: When set, the collection lives under this key of each
            response (e.g. ``"tracks"`` for search). A response without the
            key yields nothing; one whose key holds something other than a
            collection page is yielded whole.
    """

    def __init__(
        self,
        fetch: FetchFn,
        spec: RequestSpec,
        credential: Credential | None = None,
        container_key: str | None = None,
    ) -> None:
        self._fetch = fetch
        self._spec = spec
        self._container_key = container_key
        self.credential = credential

    def __iter__(self) -> Iterator[Any]:
        spec: RequestSpec | None = self._spec
        while spec is not None:
            value, self.credential = self._fetch(spec, self.credential)

            collection = value
            if self._container_key is not None and isinstance(value, dict):
                collection = value.get(self._container_key, _MISSING)
                if collection is _MISSING:
                    return

            # Non-collections pass through as the whole response.
            page = as_collection_page(collection)
            if page is None:
                yield value
                return

            yield from page.items

            if page.next is None:
                return
            logger.debug(f"Following next page: {page.next}")
            spec = spec.with_target(page.next)
