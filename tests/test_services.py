"""Tests for services/ — playlists, playlist tracks, search kinds, search_info."""
from datetime import timedelta

import pytest

from conftest import T0
from spotify_catalog.models.auth import Credential
from spotify_catalog.models.catalog import PlaylistInfo, TrackInfo
from spotify_catalog.services.playlists import PlaylistService
from spotify_catalog.services.search import SearchService
from spotify_catalog.utils.errors import TransportError

API = "https://api.spotify.com/v1/"


@pytest.fixture(autouse=True)
def valid_credential(client):
    client.credential = Credential(access_token="tok", expires_at=T0 + timedelta(hours=1))


def _track(name, *artists):
    return {"name": name, "artists": [{"name": a} for a in artists]}


def _page(items, next_url=None):
    return {"items": items, "next": next_url}


# ── PlaylistService ──────────────────────────────────────────────────

def test_playlists_endpoint(client, transport):
    transport.queue(_page([{"id": "p1", "name": "One"}]))

    result = list(PlaylistService(client).playlists("alice"))
    assert result == [{"id": "p1", "name": "One"}]
    assert transport.urls == [API + "users/alice/playlists"]


def test_playlist_tracks_unwraps_and_skips_null(client, transport):
    transport.queue(
        _page([{"track": _track("A", "x")}, {"track": None}], API + "playlists/p1/tracks?offset=2"),
        _page([{"track": _track("B", "y")}]),
    )

    tracks = list(PlaylistService(client).playlist_tracks("p1"))
    assert [t["name"] for t in tracks] == ["A", "B"]
    assert transport.urls[0] == API + "playlists/p1/tracks"


def test_find_by_name(client, transport):
    transport.queue(_page([{"id": "p1", "name": "One"}, {"id": "p2", "name": "Two"}]))

    assert list(PlaylistService(client).find("alice", name="Two")) == [PlaylistInfo(id="p2", name="Two")]


def test_playlist_track_info(client, transport):
    transport.queue(
        _page([{"id": "p1", "name": "One"}, {"id": "p2", "name": "Two"}]),
        _page([{"track": _track("Song", "A", "B")}]),
    )

    result = list(PlaylistService(client).playlist_track_info("alice", playlist_id="p1"))
    assert result == [(PlaylistInfo(id="p1", name="One"), TrackInfo(name="Song", artists=["A", "B"]))]
    assert transport.urls[1] == API + "playlists/p1/tracks"


# ── SearchService ────────────────────────────────────────────────────

def test_search_with_kind(client, transport):
    transport.queue({"tracks": _page([_track("A")])})

    results = list(SearchService(client).search("daft punk", "track", limit=10))
    assert results == [_track("A")]
    assert transport.urls == [API + "search?q=daft+punk&type=track&limit=10"]


def test_search_follows_pages(client, transport):
    transport.queue(
        {"tracks": _page([1], API + "search?q=x&type=track&offset=1")},
        {"tracks": _page([2])},
    )

    assert list(SearchService(client).search("x", "track")) == [1, 2]
    assert transport.urls[1] == API + "search?q=x&type=track&offset=1"


def test_search_type_keyword_used_as_kind(client, transport):
    transport.queue({"albums": _page([{"id": "al1"}])})

    assert list(SearchService(client).search("x", type="album")) == [{"id": "al1"}]
    assert transport.urls == [API + "search?q=x&type=album"]


def test_search_default_uses_first_kind_with_results(client, transport):
    transport.queue(
        {"tracks": _page([])},
        {"albums": _page([{"id": "al1"}])},
    )

    assert list(SearchService(client).search("x")) == [{"id": "al1"}]
    assert transport.urls == [API + "search?q=x&type=track", API + "search?q=x&type=album"]


def test_search_default_stops_at_tracks(client, transport):
    transport.queue({"tracks": _page([_track("A")])})

    assert len(list(SearchService(client).search("x"))) == 1
    assert len(transport.calls) == 1


def test_search_default_nothing_found(client, transport):
    transport.queue(*[{f"{k}s": _page([])} for k in ("track", "album", "artist", "playlist")])

    assert list(SearchService(client).search("zzz")) == []
    assert len(transport.calls) == 4


def test_search_error_propagates(client, transport):
    transport.queue(TransportError("API error (HTTP 400): No search query", status_code=400))

    with pytest.raises(TransportError):
        list(SearchService(client).search(""))


def test_search_info(client, transport):
    transport.queue({"tracks": _page([_track("One More Time", "Daft Punk")])})

    assert list(SearchService(client).search_info("one more time")) == [
        TrackInfo(name="One More Time", artists=["Daft Punk"])
    ]
