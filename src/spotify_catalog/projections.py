"""Field extraction over already-fetched track and playlist objects."""

from __future__ import annotations

from typing import Any

from spotify_catalog.models.catalog import PlaylistInfo, TrackInfo


def track_name(track: dict[str, Any]) -> str:
    return track["name"]


def track_artists(track: dict[str, Any]) -> list[str]:
    """Names of the track's artists, in credit order."""
    return [artist["name"] for artist in track["artists"] if "name" in artist]


def track_info(track: dict[str, Any]) -> TrackInfo:
    return TrackInfo(name=track_name(track), artists=track_artists(track))


def playlist_info(playlist: dict[str, Any]) -> PlaylistInfo:
    return PlaylistInfo(id=playlist["id"], name=playlist["name"])
