"""CLI commands for catalog search."""

from __future__ import annotations

from itertools import islice
from typing import Annotated

import typer
from rich.console import Console

from spotify_catalog.client import SpotifyClient
from spotify_catalog.config import get_config
from spotify_catalog.services.search import SearchService
from spotify_catalog.utils.errors import SpotifyCatalogError, handle_error
from spotify_catalog.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="search", help="Search the Spotify catalog.")


def _build_client(verbose: bool = False) -> tuple[SpotifyClient, SearchService]:
    client = SpotifyClient(get_config(), verbose=verbose)
    return client, SearchService(client)


@app.command("run")
def run_search(
    query: Annotated[str, typer.Argument(help="Search query")],
    kind: Annotated[str | None, typer.Option("--type", "-t", help="track, album, artist or playlist (default: first kind with results)")] = None,
    page_size: Annotated[int | None, typer.Option("--limit", "-l", help="Results per page")] = None,
    limit: Annotated[int, typer.Option("--max", "-m", help="Stop after this many results")] = 20,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each request")] = False,
) -> None:
    """Search for tracks, albums, artists or playlists."""
    client, service = _build_client(verbose)
    params = {"limit": page_size} if page_size else {}
    try:
        results = [r for r in islice(service.search(query, kind, **params), limit) if isinstance(r, dict)]
        columns = ["id", "type", "name", "artists"] if kind in (None, "track", "album") else ["id", "type", "name"]
        print_output(results, output, columns=columns, title=f"Search: {query}")
    except SpotifyCatalogError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("tracks")
def track_search(
    query: Annotated[str, typer.Argument(help="Search query")],
    limit: Annotated[int, typer.Option("--max", "-m", help="Stop after this many tracks")] = 20,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each request")] = False,
) -> None:
    """Search tracks and show name and artists only."""
    client, service = _build_client(verbose)
    try:
        rows = [info.model_dump() for info in islice(service.search_info(query), limit)]
        print_output(rows, output, columns=["name", "artists"], title=f"Tracks: {query}")
    except SpotifyCatalogError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
