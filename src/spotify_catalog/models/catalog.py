"""Catalog data models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CollectionPage(BaseModel):
    """One page of a paginated Web API collection.

    Both keys must be present; ``next`` is null on the last page.
    """
    items: list[Any]
    next: str | None


class TrackInfo(BaseModel):
    name: str
    artists: list[str] = []

    def csv_row(self) -> tuple[str, str]:
        return self.name, ",".join(self.artists)


class PlaylistInfo(BaseModel):
    id: str
    name: str
