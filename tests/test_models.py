"""Tests for models and projections — credentials, specs, track/playlist records, CSV export."""
import io
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from conftest import T0
from spotify_catalog.export import playlist_to_csv
from spotify_catalog.models.auth import Credential, TokenResponse
from spotify_catalog.models.catalog import PlaylistInfo, TrackInfo
from spotify_catalog.models.requests import Endpoint, RawURL, RequestSpec
from spotify_catalog.projections import playlist_info, track_artists, track_info, track_name

TRACK = {
    "id": "t1",
    "name": "Around the World",
    "artists": [{"name": "Daft Punk"}, {"name": "Guest"}],
}


# ── Credential ───────────────────────────────────────────────────────

def test_credential_is_frozen():
    cred = Credential(access_token="a", expires_at=T0)
    with pytest.raises(ValidationError):
        cred.access_token = "b"


def test_credential_expiry_boundary():
    cred = Credential(access_token="a", expires_at=T0)
    assert cred.is_expired(T0 - timedelta(seconds=1)) is False
    assert cred.is_expired(T0) is True


def test_credential_without_expiry_never_expires():
    assert Credential(access_token="a").is_expired(T0) is False


def test_credential_authorization_header():
    assert Credential(access_token="abc").authorization == "Bearer abc"


def test_token_response_requires_fields():
    with pytest.raises(ValidationError):
        TokenResponse(access_token="a", token_type="Bearer")


# ── RequestSpec ──────────────────────────────────────────────────────

def test_with_target_keeps_other_fields():
    spec = RequestSpec(
        target=Endpoint(path="x", params=(("a", 1),)),
        method="POST", body="b=2", extra_headers=(("X-Test", "1"),), requires_auth=False,
    )
    nxt = spec.with_target("https://next")
    assert nxt.target == RawURL(url="https://next")
    assert (nxt.method, nxt.body, nxt.extra_headers, nxt.requires_auth) == (
        "POST", "b=2", (("X-Test", "1"),), False,
    )
    assert spec.target.path == "x"


def test_has_header_case_insensitive():
    spec = RequestSpec(target=Endpoint(path="x"), extra_headers=(("authorization", "Bearer z"),))
    assert spec.has_header("Authorization") is True
    assert spec.has_header("Accept") is False


def test_method_restricted():
    with pytest.raises(ValidationError):
        RequestSpec(target=Endpoint(path="x"), method="DELETE")


# ── Projections ──────────────────────────────────────────────────────

def test_track_name():
    assert track_name(TRACK) == "Around the World"


def test_track_artists_in_order():
    assert track_artists(TRACK) == ["Daft Punk", "Guest"]


def test_track_info():
    assert track_info(TRACK) == TrackInfo(name="Around the World", artists=["Daft Punk", "Guest"])


def test_track_missing_name_raises():
    with pytest.raises(KeyError):
        track_info({"artists": []})


def test_playlist_info():
    assert playlist_info({"id": "p1", "name": "Mix", "tracks": {}}) == PlaylistInfo(id="p1", name="Mix")


def test_csv_row_joins_artists():
    assert TrackInfo(name="N", artists=["A", "B"]).csv_row() == ("N", "A,B")


# ── CSV export ───────────────────────────────────────────────────────

def test_playlist_to_csv():
    service = MagicMock()
    info = PlaylistInfo(id="p1", name="Mix")
    service.playlist_track_info.return_value = iter([
        (info, TrackInfo(name="Song", artists=["A", "B"])),
        (info, TrackInfo(name="Solo", artists=["C"])),
    ])
    stream = io.StringIO()

    rows = playlist_to_csv(service, "alice", stream, playlist_id="p1")
    assert rows == 2
    assert stream.getvalue().splitlines() == ['Song,"A,B"', "Solo,C"]
    service.playlist_track_info.assert_called_once_with("alice", "p1", None)


def test_playlist_to_csv_empty():
    service = MagicMock()
    service.playlist_track_info.return_value = iter([])
    stream = io.StringIO()

    assert playlist_to_csv(service, "alice", stream, name="Nope") == 0
    assert stream.getvalue() == ""
