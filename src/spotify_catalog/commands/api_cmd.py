"""CLI commands for raw Web API access."""

from __future__ import annotations

from itertools import islice
from typing import Annotated

import typer
from rich.console import Console

from spotify_catalog.client import SpotifyClient
from spotify_catalog.config import get_config
from spotify_catalog.utils.errors import SpotifyCatalogError, handle_error
from spotify_catalog.utils.output import print_json

console = Console(stderr=True)
app = typer.Typer(name="api", help="Call Web API endpoints directly.")


@app.callback()
def api() -> None:
    """Call Web API endpoints directly."""


def _parse_params(params: list[str]) -> list[tuple[str, str]]:
    parsed = []
    for param in params:
        key, sep, value = param.partition("=")
        if not sep:
            raise typer.BadParameter(f"Expected key=value, got '{param}'", param_hint="--param")
        parsed.append((key, value))
    return parsed


@app.command("get")
def get(
    endpoint: Annotated[str, typer.Argument(help="Endpoint relative to the API base, e.g. browse/new-releases")],
    param: Annotated[list[str] | None, typer.Option("--param", "-p", help="Query parameter as key=value (repeatable)")] = None,
    key: Annotated[str | None, typer.Option("--key", "-k", help="Response key holding the collection, e.g. albums")] = None,
    limit: Annotated[int | None, typer.Option("--max", "-m", help="Stop after this many items")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each request")] = False,
) -> None:
    """GET an endpoint, following pagination, and print every item as JSON."""
    params = _parse_params(param or [])
    client = SpotifyClient(get_config(), verbose=verbose)
    try:
        spec = client.spec(endpoint, params)
        print_json(list(islice(client.paginate(spec, container_key=key), limit)))
    except SpotifyCatalogError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
