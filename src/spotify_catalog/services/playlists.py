"""Playlist listing and track retrieval service."""

from __future__ import annotations

from typing import Any, Iterator

from spotify_catalog.client import SpotifyClient
from spotify_catalog.models.catalog import PlaylistInfo, TrackInfo
from spotify_catalog.projections import playlist_info, track_info


class PlaylistService:
    """Service for reading a user's public playlists and their tracks."""

    def __init__(self, client: SpotifyClient) -> None:
        self._client = client

    def playlists(self, user: str) -> Iterator[dict[str, Any]]:
        """Every playlist object owned or followed by ``user``."""
        return self._client.paginate(self._client.spec(f"users/{user}/playlists"))

    def playlist_tracks(self, playlist_id: str) -> Iterator[dict[str, Any]]:
        """Every track object of a playlist.

        Entries whose track is null (removed or unavailable) are skipped.
        """
        spec = self._client.spec(f"playlists/{playlist_id}/tracks")
        for item in self._client.paginate(spec):
            track = item.get("track") if isinstance(item, dict) else None
            if track:
                yield track

    def find(
        self, user: str, playlist_id: str | None = None, name: str | None = None
    ) -> Iterator[PlaylistInfo]:
        """User playlists matching the given id and/or name (all if neither)."""
        for playlist in self.playlists(user):
            info = playlist_info(playlist)
            if playlist_id is not None and info.id != playlist_id:
                continue
            if name is not None and info.name != name:
                continue
            yield info

    def playlist_track_info(
        self, user: str, playlist_id: str | None = None, name: str | None = None
    ) -> Iterator[tuple[PlaylistInfo, TrackInfo]]:
        """Track name/artists for every track of every matching playlist."""
        for info in self.find(user, playlist_id, name):
            for track in self.playlist_tracks(info.id):
                yield info, track_info(track)
