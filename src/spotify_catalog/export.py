"""CSV export of playlist tracks."""

from __future__ import annotations

import csv
from typing import TextIO

from spotify_catalog.services.playlists import PlaylistService


def playlist_to_csv(
    service: PlaylistService,
    user: str,
    stream: TextIO,
    playlist_id: str | None = None,
    name: str | None = None,
) -> int:
    """Write one ``name,artists`` row per track of the matching playlists.

    Artists are joined with commas into a single field. No header row.

    Returns:
        The number of rows written.
    """
    writer = csv.writer(stream)
    rows = 0
    for _, track in service.playlist_track_info(user, playlist_id, name):
        writer.writerow(track.csv_row())
        rows += 1
    return rows
