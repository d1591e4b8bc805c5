"""spotify-catalog CLI entry point.

Read playlists, tracks and search results from the Spotify Web API using
client-credentials auth.
"""

from __future__ import annotations

import logging

import typer

from spotify_catalog.commands.api_cmd import app as api_app
from spotify_catalog.commands.auth_cmd import app as auth_app
from spotify_catalog.commands.playlists_cmd import app as playlists_app
from spotify_catalog.commands.search_cmd import app as search_app

app = typer.Typer(
    name="spotify-catalog",
    help="Read playlists, tracks and search results from the Spotify Web API.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(playlists_app, name="playlists")
app.add_typer(search_app, name="search")
app.add_typer(api_app, name="api")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """spotify-catalog — playlists, tracks, search and CSV export."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
