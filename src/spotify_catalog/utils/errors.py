"""Exception types and structured error handling for agent-friendly output."""

from __future__ import annotations

import json
import sys

from rich.console import Console

console = Console(stderr=True)


class SpotifyCatalogError(RuntimeError):
    """Base class for every error raised by spotify_catalog."""

    code = "RUNTIME_ERROR"


class TransportError(SpotifyCatalogError):
    """Network failure or non-2xx response from the HTTP transport."""

    code = "TRANSPORT_ERROR"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthResponseMalformed(SpotifyCatalogError):
    """The token endpoint answered without a usable access token."""

    code = "AUTH_MALFORMED"


class MissingCredentials(SpotifyCatalogError):
    """No client id / client secret configured."""

    code = "MISSING_CREDENTIALS"


# Actionable hints keyed by error substring
_ERROR_HINTS: list[tuple[str, str]] = [
    ("client id", "Set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET in your .env file"),
    ("invalid_client", "Client credentials were rejected — check SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET"),
    ("401", "Token was rejected — run `spotify-catalog auth token` to verify credentials"),
    ("unauthorized", "Token was rejected — run `spotify-catalog auth token` to verify credentials"),
    ("access_token", "The token endpoint returned an unexpected body — check the auth endpoint URL"),
    ("429", "Rate limited — wait a moment and retry"),
    ("rate limit", "Rate limited — wait a moment and retry"),
    ("404", "Resource not found — verify the user, playlist or endpoint"),
    ("timeout", "Request timed out — try again or raise SPOTIFY_TIMEOUT"),
    ("timed out", "Request timed out — try again or raise SPOTIFY_TIMEOUT"),
    ("connect", "Connection error — check network connectivity"),
]


def _get_hint(error_message: str) -> str | None:
    """Match an error message to an actionable hint."""
    lower = error_message.lower()
    for pattern, hint in _ERROR_HINTS:
        if pattern.lower() in lower:
            return hint
    return None


def _get_code(error: Exception) -> str:
    """Classify an error, preferring its type over its message."""
    message = str(error).lower()

    if isinstance(error, TransportError) and error.status_code is not None:
        if error.status_code in (401, 403):
            return "AUTH_ERROR"
        if error.status_code == 404:
            return "NOT_FOUND"
        if error.status_code == 429:
            return "RATE_LIMITED"
    if isinstance(error, SpotifyCatalogError):
        return error.code

    if "401" in message or "unauthorized" in message:
        return "AUTH_ERROR"
    if "429" in message or "rate limit" in message:
        return "RATE_LIMITED"
    if "timeout" in message:
        return "TIMEOUT"
    if "connection" in message:
        return "CONNECTION_ERROR"
    return "RUNTIME_ERROR"


def handle_error(error: Exception) -> None:
    """Handle an error with structured output to stdout and human-readable output to stderr.

    Outputs a JSON error object to stdout for agent consumption:
    {"error": true, "code": "TRANSPORT_ERROR", "message": "...", "hint": "..."}

    Also prints a human-readable error to stderr.
    """
    message = str(error)
    hint = _get_hint(message)

    error_obj: dict[str, object] = {
        "error": True,
        "code": _get_code(error),
        "message": message,
    }
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
