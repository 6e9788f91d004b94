"""CLI utility helpers: output formatting and connection management.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from oraspine.core.errors import OciError, OraSpineError
from oraspine.core.logging import configure_logging
from oraspine.core.settings import get_settings
from oraspine.oci.connection import Connection

console = Console()
err_console = Console(stderr=True)


# ── Connection helper ────────────────────────────────────────────────────


@contextmanager
def open_connection(
    dsn: str | None = None,
    username: str | None = None,
    password: str | None = None,
) -> Iterator[Connection]:
    """Open a connection from ``ORACLE_*`` settings plus CLI overrides.

    Any ``OraSpineError`` raised while connecting or inside the block is
    printed and turned into exit code 1.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    try:
        with settings.connect(dsn=dsn, username=username, password=password) as conn:
            yield conn
    except OraSpineError as exc:
        fail(exc)


# ── Output helpers ───────────────────────────────────────────────────────


def fail(exc: OraSpineError) -> None:
    """Print ``Error (<code>): <message>`` to stderr and exit 1."""
    code = exc.code if isinstance(exc, OciError) and exc.code else exc.category.value
    err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(exc.message)}")
    raise typer.Exit(code=1)


def output_rows(
    columns: list[str],
    rows: list[tuple],
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render query rows as a Rich table or a JSON array of objects."""
    if as_json:
        payload = [dict(zip(columns, row, strict=False)) for row in rows]
        console.print_json(json.dumps(payload, default=str))
        return

    if not rows:
        console.print("[dim]No rows.[/dim]")
        return

    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(_cell(v) for v in row))
    console.print(table)


def _cell(value: Any) -> str:
    return "" if value is None else str(value)
