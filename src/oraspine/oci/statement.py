"""Prepared statements created by ``Connection.prepare``."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from oraspine.core.errors import ConnectionClosedError, OciQueryError
from oraspine.core.logging import get_logger
from oraspine.core.protocols import DriverCursor, DriverHandle

from .types import ExecuteMode

if TYPE_CHECKING:
    from .connection import Connection

logger = get_logger(__name__)


class Statement:
    """
    SQL text bound to a connection's driver handle.

    Nothing touches the database until ``execute()``.  After a successful
    execute in ``COMMIT_ON_SUCCESS`` mode the session is committed; in
    ``NO_AUTO_COMMIT`` mode the caller commits through the connection.

    Example:
        with conn.prepare("SELECT id, name FROM users WHERE id = :id") as stmt:
            stmt.execute({"id": 7})
            row = stmt.fetch()
    """

    def __init__(self, handle: DriverHandle, sql: str, connection: Connection):
        self._handle = handle
        self._sql = sql
        self._connection = connection
        self._cursor: DriverCursor | None = None
        self._executed = False
        self._closed = False

    @property
    def sql(self) -> str:
        return self._sql

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def executed(self) -> bool:
        return self._executed

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def row_count(self) -> int:
        """Rows affected by DML, or rows fetched so far for queries."""
        if self._cursor is None:
            return 0
        return self._cursor.rowcount

    @property
    def column_names(self) -> list[str]:
        """Result column names; empty for statements that return no rows."""
        if self._cursor is None or not self._cursor.description:
            return []
        return [desc[0] for desc in self._cursor.description]

    def _ensure_usable(self) -> None:
        if self._closed:
            raise ConnectionClosedError("Statement is closed").with_context(sql=self._sql)
        self._connection._require_open()

    def _ensure_executed(self) -> DriverCursor:
        self._ensure_usable()
        if not self._executed or self._cursor is None:
            raise OciQueryError("Statement has not been executed").with_context(sql=self._sql)
        return self._cursor

    def execute(self, params: Any = None) -> None:
        """Run the statement, applying the connection's execution mode.

        Args:
            params: Optional bind values (sequence or mapping), passed to the
                driver untouched.

        Raises:
            OciQueryError: The driver rejected the statement or the commit.
        """
        self._ensure_usable()

        def run() -> None:
            if self._cursor is None:
                self._cursor = self._handle.cursor()
            if params is None:
                self._cursor.execute(self._sql)
            else:
                self._cursor.execute(self._sql, params)
            if self._connection.execute_mode is ExecuteMode.COMMIT_ON_SUCCESS:
                self._handle.commit()

        self._connection._call(run, sql=self._sql)
        self._executed = True
        logger.debug(
            "statement_executed",
            sql=self._sql,
            execute_mode=self._connection.execute_mode.name,
        )

    def fetch(self) -> tuple | None:
        """Next row as a tuple, or ``None`` once the result is exhausted."""
        cursor = self._ensure_executed()
        return self._connection._call(cursor.fetchone, sql=self._sql)

    def fetch_all(self) -> list[tuple]:
        """All remaining rows."""
        cursor = self._ensure_executed()
        return list(self._connection._call(cursor.fetchall, sql=self._sql))

    def fetch_column(self, index: int = 0) -> Any:
        """Column ``index`` of the next row, or ``None`` if no row remains."""
        row = self.fetch()
        if row is None:
            return None
        return row[index]

    def __iter__(self) -> Iterator[tuple]:
        while (row := self.fetch()) is not None:
            yield row

    def close(self) -> None:
        """Free the driver cursor.  Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        cursor, self._cursor = self._cursor, None
        self._connection._forget(self)
        if cursor is not None:
            self._connection._call(cursor.close, sql=self._sql, clear=False)

    def __enter__(self) -> Statement:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("executed" if self._executed else "prepared")
        return f"Statement({self._sql!r}, {state})"


__all__ = ["Statement"]
