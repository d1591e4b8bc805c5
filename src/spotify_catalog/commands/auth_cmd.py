"""CLI commands for authentication checks."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from spotify_catalog.auth import TokenManager
from spotify_catalog.config import get_config
from spotify_catalog.transport import HttpxTransport
from spotify_catalog.utils.errors import SpotifyCatalogError, handle_error
from spotify_catalog.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Check client credentials.")


@app.callback()
def auth() -> None:
    """Check client credentials."""


@app.command()
def token(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Mint an access token and show its status."""
    config = get_config()
    transport = HttpxTransport(timeout=config.settings.timeout)
    tokens = TokenManager(config, transport)

    try:
        console.print("Requesting client-credentials token...", style="yellow")
        credential, _ = tokens.ensure_valid(None)
        status = tokens.status(credential)
        result = {
            "status": "authenticated",
            "token_type": credential.token_type,
            "expires_at": str(status.expires_at),
            "seconds_remaining": status.seconds_remaining,
        }
        print_output(result, output, title="Authentication")
    except SpotifyCatalogError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        transport.close()
