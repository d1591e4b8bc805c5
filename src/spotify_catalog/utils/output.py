"""Output formatting for CLI results."""

from __future__ import annotations

import csv
import json
import sys
from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console(stderr=True)

Rows = list[dict[str, Any]] | dict[str, Any]


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def cell(value: Any) -> str:
    """Render one value for a table or CSV cell.

    Lists are comma-joined, records with a ``name`` show the name, and
    missing values are blank.
    """
    if value is None:
        return ""
    if isinstance(value, dict):
        return str(value.get("name", json.dumps(value, default=str)))
    if isinstance(value, list):
        return ",".join(cell(v) for v in value)
    return str(value)


def print_output(
    data: Rows,
    fmt: OutputFormat = OutputFormat.TABLE,
    columns: list[str] | None = None,
    title: str | None = None,
) -> None:
    """Print data in the requested format.

    Args:
        data: The data to display (list of dicts or single dict).
        fmt: Output format (table, json, csv).
        columns: Which columns to show in table/csv mode. None = all.
        title: Optional title for table output.
    """
    if fmt == OutputFormat.JSON:
        print_json(data)
    elif fmt == OutputFormat.CSV:
        print_csv(data, columns)
    else:
        print_table(data, columns, title)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    json.dump(data, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def print_table(data: Rows, columns: list[str] | None = None, title: str | None = None) -> None:
    """Print data as a Rich table."""
    if isinstance(data, dict):
        data = [data]

    if not data:
        console.print("[dim]No results.[/dim]")
        return

    if columns is None:
        columns = list(data[0].keys())

    table = Table(title=title, show_lines=False)
    for col in columns:
        table.add_column(col, overflow="fold")

    for row in data:
        table.add_row(*[cell(row.get(col)) for col in columns])

    console.print(table)


def print_csv(data: Rows, columns: list[str] | None = None) -> None:
    """Print data as CSV to stdout."""
    if isinstance(data, dict):
        data = [data]

    if not data:
        return

    if columns is None:
        columns = list(data[0].keys())

    writer = csv.DictWriter(sys.stdout, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for row in data:
        writer.writerow({k: cell(row.get(k)) for k in columns})
