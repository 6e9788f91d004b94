"""
Oracle connection: one driver session plus the statements it creates.

Manifesto:
    Callers should not juggle cursors, commit flags and ``ORA-`` codes by
    hand.  A ``Connection`` owns exactly one driver handle, fixes the
    execution mode every one of its statements uses, and keeps the last
    driver error so it can be inspected without catching anything.

Features:
    - Eager connect in ``__init__``; failure raises ``OciConnectionError``
    - ``prepare`` / ``query`` returning ``Statement`` objects
    - ``last_insert_id`` reading ``<sequence>.CURRVAL`` with identifier checks
    - ``error_code`` / ``error_info`` over an explicit ``ErrorRecord`` slot
    - Deterministic release with ``close()`` or ``with Connection(...)``
    - Standalone or persistent (pooled) handles through a ``ConnectionProvider``

Examples:
    >>> with Connection("scott", "tiger", "db.example.com/ORCLPDB1") as conn:
    ...     conn.query("SELECT 1 FROM DUAL").fetch_column()
    1

    >>> conn = Connection("scott", "tiger", "db/ORCLPDB1", session_mode=ExecuteMode.NO_AUTO_COMMIT)
    >>> stmt = conn.query("INSERT INTO t (id) VALUES (t_seq.NEXTVAL)")
    >>> conn.last_insert_id("t_seq")
    42
    >>> conn.commit()

Guardrails:
    ❌ DON'T: ``conn.last_insert_id(user_input)`` with untrusted names
    ✅ DO: Pass sequence names from code; invalid names raise before any SQL
    ❌ DON'T: Rely on garbage collection to end sessions
    ✅ DO: ``close()`` or use the context manager

Tags:
    oracle, oracledb, connection, statement, sequence, oraspine

Doc-Types:
    api-reference
"""

from __future__ import annotations

import warnings
import weakref
from collections.abc import Callable
from typing import Any, TypeVar

import oracledb

from oraspine.core.errors import (
    ConnectionClosedError,
    EmptyResultError,
    ErrorContext,
    OciConnectionError,
    OciQueryError,
)
from oraspine.core.logging import get_logger
from oraspine.core.protocols import ConnectionProvider, DriverHandle

from .identifiers import validate_identifier
from .providers import StandaloneProvider, persistent_provider
from .records import NO_ERROR, ErrorRecord
from .statement import Statement
from .types import (
    DEFAULT_EXECUTE_MODE,
    AuthMode,
    ConnectParams,
    ExecuteMode,
    coerce_auth_mode,
    coerce_execute_mode,
    normalize_charset,
)

logger = get_logger(__name__)

T = TypeVar("T")

EMPTY_RESULT_MESSAGE = "lastInsertId failed: query executed without a result"

# CURRVAL not yet defined in this session; sequence does not exist
NO_CURRVAL_CODES = frozenset({"ORA-08002", "ORA-02289"})


class Connection:
    """
    A single Oracle session.

    Args:
        username: Database user.
        password: Password for ``username``.
        dsn: Connect string (``host:port/service``, TNS alias, EZConnect).
        charset: Client charset; empty or a UTF-8 spelling.
        session_mode: Execution mode for every statement of this connection.
        persistent: Draw the handle from ``persistent_provider`` instead of
            opening a dedicated session.
        auth_mode: Privileged session mode (``SYSDBA`` ...).
        provider: Explicit provider; overrides ``persistent``.

    Raises:
        InvalidConfigError: Bad ``charset``, ``session_mode`` or ``auth_mode``.
        OciConnectionError: The driver could not open a session.
    """

    def __init__(
        self,
        username: str,
        password: str,
        dsn: str,
        charset: str = "",
        session_mode: ExecuteMode = DEFAULT_EXECUTE_MODE,
        persistent: bool = False,
        *,
        auth_mode: AuthMode = AuthMode.DEFAULT,
        provider: ConnectionProvider | None = None,
    ):
        self._execute_mode = coerce_execute_mode(session_mode)
        self._params = ConnectParams(
            username=username,
            password=password,
            dsn=dsn,
            charset=normalize_charset(charset),
            auth_mode=coerce_auth_mode(auth_mode),
        )
        self._persistent = persistent
        if provider is None:
            provider = persistent_provider if persistent else StandaloneProvider()
        self._provider = provider
        self._last_error: ErrorRecord = NO_ERROR
        self._statements: weakref.WeakSet[Statement] = weakref.WeakSet()
        self._handle: DriverHandle | None = None

        try:
            # python-oracledb reports connect warnings on handle.warning;
            # this filter only covers Python warnings raised by a provider
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                handle = self._provider.acquire(self._params)
        except oracledb.Error as exc:
            record = ErrorRecord.from_driver(exc)
            logger.warning(
                "connection_failed",
                dsn=dsn,
                username=username,
                persistent=persistent,
                code=record.code,
            )
            raise OciConnectionError.from_record(
                record, context=ErrorContext(dsn=dsn), cause=exc
            ) from exc

        if handle is None:
            logger.warning("connection_failed", dsn=dsn, username=username, code=None)
            raise OciConnectionError(
                "Driver returned no connection handle", context=ErrorContext(dsn=dsn)
            )

        self._handle = handle
        driver_warning = getattr(handle, "warning", None)
        if driver_warning is not None:
            logger.debug("connection_warning", dsn=dsn, warning=str(driver_warning))
        logger.info(
            "connection_opened",
            dsn=dsn,
            username=username,
            persistent=persistent,
            execute_mode=self._execute_mode.name,
        )

    # ── Properties ───────────────────────────────────────────────────

    @property
    def params(self) -> ConnectParams:
        return self._params

    @property
    def dsn(self) -> str:
        return self._params.dsn

    @property
    def persistent(self) -> bool:
        return self._persistent

    @property
    def execute_mode(self) -> ExecuteMode:
        return self._execute_mode

    @property
    def closed(self) -> bool:
        return self._handle is None

    @property
    def server_version(self) -> str:
        """Server version string reported by the driver (e.g. ``"23.4.0.24.5"``)."""
        return str(self._require_open().version)

    def get_execute_mode(self) -> ExecuteMode:
        """Execution mode fixed at construction."""
        return self._execute_mode

    # ── Internal plumbing shared with Statement ──────────────────────

    def _require_open(self) -> DriverHandle:
        if self._handle is None:
            raise ConnectionClosedError("Connection is closed").with_context(dsn=self.dsn)
        return self._handle

    def _call(
        self, operation: Callable[[], T], *, sql: str | None = None, clear: bool = True
    ) -> T:
        """Run a driver operation, keeping the last-error slot current.

        ``clear=False`` is for release calls: they record a failure but a
        successful release leaves an earlier error in place.
        """
        try:
            result = operation()
        except oracledb.Error as exc:
            record = ErrorRecord.from_driver(exc, sql=sql)
            self._last_error = record
            logger.warning("statement_failed", dsn=self.dsn, sql=sql, code=record.code)
            raise OciQueryError.from_record(
                record, context=ErrorContext(dsn=self.dsn, sql=sql), cause=exc
            ) from exc
        if clear:
            self._last_error = NO_ERROR
        return result

    def _forget(self, statement: Statement) -> None:
        self._statements.discard(statement)

    # ── Statements ───────────────────────────────────────────────────

    def prepare(self, sql: str) -> Statement:
        """Create a statement for ``sql`` without executing it."""
        handle = self._require_open()
        statement = Statement(handle, sql, self)
        self._statements.add(statement)
        return statement

    def query(self, sql: str) -> Statement:
        """Prepare and execute ``sql``; return the executed statement.

        If execution fails the statement is closed before the error
        propagates, and the error slot keeps the execution failure.
        """
        statement = self.prepare(sql)
        try:
            statement.execute()
        except BaseException:
            statement.close()
            raise
        return statement

    def last_insert_id(self, sequence_name: str) -> int:
        """Current value of ``sequence_name`` in this session.

        Raises:
            InvalidIdentifierError: ``sequence_name`` is not a safe identifier.
            EmptyResultError: No value: the query returned no row, the sequence
                was not yet used in this session (ORA-08002) or does not
                exist (ORA-02289).
            OciQueryError: Any other driver failure.
        """
        validate_identifier(sequence_name)
        sql = f"SELECT {sequence_name}.CURRVAL FROM DUAL"
        context = ErrorContext(dsn=self.dsn, sql=sql, sequence=sequence_name)
        try:
            with self.query(sql) as statement:
                value = statement.fetch_column()
        except OciQueryError as exc:
            if exc.code not in NO_CURRVAL_CODES:
                raise
            raise EmptyResultError(
                EMPTY_RESULT_MESSAGE, record=exc.record, context=context, cause=exc
            ) from exc

        if value is None:
            raise EmptyResultError(EMPTY_RESULT_MESSAGE, context=context)
        return int(value)

    def release_statements(self) -> int:
        """Close every open statement created by this connection.

        Returns:
            Number of statements closed.
        """
        statements = list(self._statements)
        for statement in statements:
            statement.close()
        return len(statements)

    # ── Errors ───────────────────────────────────────────────────────

    def error_code(self) -> str | None:
        """Code of the last driver error on this connection, or ``None``."""
        return self._last_error.code

    def error_info(self) -> ErrorRecord:
        """Full last driver error record; ``NO_ERROR`` when there is none."""
        return self._last_error

    # ── Transactions ─────────────────────────────────────────────────

    def commit(self) -> None:
        handle = self._require_open()
        self._call(handle.commit)

    def rollback(self) -> None:
        handle = self._require_open()
        self._call(handle.rollback)

    def ping(self) -> None:
        """Round trip to the server."""
        handle = self._require_open()
        self._call(handle.ping)

    # ── Lifecycle ────────────────────────────────────────────────────

    def close(self) -> None:
        """Close open statements and hand the session back to its provider."""
        if self._handle is None:
            return
        try:
            self.release_statements()
        finally:
            handle, self._handle = self._handle, None
            try:
                self._provider.release(handle)
            except oracledb.Error as exc:
                record = ErrorRecord.from_driver(exc)
                self._last_error = record
                raise OciQueryError.from_record(
                    record, context=ErrorContext(dsn=self.dsn), cause=exc
                ) from exc
            finally:
                logger.info("connection_closed", dsn=self.dsn, persistent=self._persistent)

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return (
            f"Connection(username={self._params.username!r}, dsn={self.dsn!r}, "
            f"execute_mode={self._execute_mode.name}, persistent={self._persistent}, {state})"
        )


__all__ = ["Connection", "EMPTY_RESULT_MESSAGE", "NO_CURRVAL_CODES"]
