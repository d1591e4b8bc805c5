"""CLI commands for playlists."""

from __future__ import annotations

import sys
from itertools import islice
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from spotify_catalog.client import SpotifyClient
from spotify_catalog.config import get_config
from spotify_catalog.export import playlist_to_csv
from spotify_catalog.services.playlists import PlaylistService
from spotify_catalog.utils.errors import SpotifyCatalogError, handle_error
from spotify_catalog.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="playlists", help="List playlists, their tracks, and export them.")


def _build_client(verbose: bool = False) -> tuple[SpotifyClient, PlaylistService]:
    client = SpotifyClient(get_config(), verbose=verbose)
    return client, PlaylistService(client)


def _playlist_row(playlist: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": playlist.get("id"),
        "name": playlist.get("name"),
        "owner": (playlist.get("owner") or {}).get("display_name"),
        "tracks": (playlist.get("tracks") or {}).get("total"),
    }


@app.command("list")
def list_playlists(
    user: Annotated[str, typer.Argument(help="Spotify user ID")],
    limit: Annotated[int | None, typer.Option("--max", "-m", help="Stop after this many playlists")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each request")] = False,
) -> None:
    """List a user's public playlists."""
    client, service = _build_client(verbose)
    try:
        rows = [_playlist_row(p) for p in islice(service.playlists(user), limit)]
        console.print(f"[dim]Found {len(rows)} playlists[/dim]")
        print_output(rows, output, title=f"Playlists ({user})")
    except SpotifyCatalogError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("tracks")
def list_tracks(
    playlist_id: Annotated[str, typer.Argument(help="Playlist ID")],
    limit: Annotated[int | None, typer.Option("--max", "-m", help="Stop after this many tracks")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each request")] = False,
) -> None:
    """List the tracks of a playlist."""
    client, service = _build_client(verbose)
    try:
        tracks = list(islice(service.playlist_tracks(playlist_id), limit))
        console.print(f"[dim]Found {len(tracks)} tracks[/dim]")
        columns = ["id", "name", "artists", "album"]
        print_output(tracks, output, columns=columns, title=f"Tracks ({playlist_id})")
    except SpotifyCatalogError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("export")
def export_playlist(
    user: Annotated[str, typer.Argument(help="Spotify user ID owning the playlist")],
    playlist_id: Annotated[str | None, typer.Option("--id", help="Playlist ID")] = None,
    name: Annotated[str | None, typer.Option("--name", "-n", help="Playlist name (exact match)")] = None,
    file: Annotated[Path | None, typer.Option("--file", "-f", help="Write CSV here instead of stdout")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each request")] = False,
) -> None:
    """Export a playlist's tracks as CSV rows of name and artists."""
    if playlist_id is None and name is None:
        console.print("[red]Error:[/red] pass --id or --name")
        raise typer.Exit(2)

    client, service = _build_client(verbose)
    try:
        if file is None:
            rows = playlist_to_csv(service, user, sys.stdout, playlist_id, name)
        else:
            with open(file, "w", newline="") as f:
                rows = playlist_to_csv(service, user, f, playlist_id, name)
        console.print(f"[dim]Wrote {rows} rows[/dim]")
    except SpotifyCatalogError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
