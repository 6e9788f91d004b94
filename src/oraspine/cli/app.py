"""
Root Typer application for the oraspine CLI.

Connection options default to the ``ORACLE_*`` environment (see
``oraspine.core.settings``); ``--dsn``/``--username``/``--password``
override them per invocation.
"""

from __future__ import annotations

import json

import typer
from typer import Typer

from oraspine.cli.utils import console, open_connection, output_rows
from oraspine.oci.identifiers import validate_identifier

app = Typer(
    name="oraspine",
    help="oraspine: Oracle connections and sequences from the shell.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

DsnOption = typer.Option(None, "--dsn", "-d", help="Connect string (default: ORACLE_DSN)")
UserOption = typer.Option(None, "--username", "-u", help="Database user (default: ORACLE_USERNAME)")
PasswordOption = typer.Option(
    None, "--password", "-p", help="Password (default: ORACLE_PASSWORD)", hide_input=True
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        from oraspine import __version__

        try:
            v = pkg_version("oraspine")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"oraspine {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """oraspine CLI for connectivity checks and ad-hoc SQL."""


# ── Commands ─────────────────────────────────────────────────────────────


@app.command()
def ping(
    dsn: str | None = DsnOption,
    username: str | None = UserOption,
    password: str | None = PasswordOption,
) -> None:
    """Connect, ping the server and print its version."""
    with open_connection(dsn, username, password) as conn:
        conn.ping()
        console.print(f"[green]OK[/green] {conn.dsn} (server {conn.server_version})")


@app.command()
def query(
    sql: str = typer.Argument(..., help="SQL to execute"),
    dsn: str | None = DsnOption,
    username: str | None = UserOption,
    password: str | None = PasswordOption,
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Execute SQL and print any rows it returns."""
    with open_connection(dsn, username, password) as conn:
        with conn.query(sql) as stmt:
            columns = stmt.column_names
            if not columns:
                if json_out:
                    console.print_json(json.dumps({"row_count": stmt.row_count}))
                else:
                    console.print(f"{stmt.row_count} row(s) affected")
                return
            rows = stmt.fetch_all()
        output_rows(columns, rows, as_json=json_out)


@app.command()
def nextval(
    sequence: str = typer.Argument(..., help="Sequence name, optionally schema-qualified"),
    dsn: str | None = DsnOption,
    username: str | None = UserOption,
    password: str | None = PasswordOption,
) -> None:
    """Advance SEQUENCE and print the value this session now reads as CURRVAL."""
    with open_connection(dsn, username, password) as conn:
        validate_identifier(sequence)
        conn.query(f"SELECT {sequence}.NEXTVAL FROM DUAL").close()
        typer.echo(conn.last_insert_id(sequence))
