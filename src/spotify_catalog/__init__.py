"""Spotify Web API catalog client: token lifecycle, pagination, playlists, search."""

__version__ = "0.1.0"
