"""
Canonical protocol definitions for oraspine.

Manifesto:
    Protocols define contracts without inheritance.  ``Connection`` and
    ``Statement`` only depend on the *shape* of a driver handle and cursor,
    so tests can hand them a ``MagicMock`` and a thick-mode or thin-mode
    ``oracledb`` connection works the same.

Architecture:
    ::

        protocols.py (YOU ARE HERE)
        ├── DriverCursor        — cursor shape used by Statement
        ├── DriverHandle        — session shape used by Connection/Statement
        └── ConnectionProvider  — acquire/release of handles (standalone or pooled)

    Consumers:
        oci/connection.py, oci/statement.py, oci/providers.py

Guardrails:
    ❌ DON'T: Type Connection internals against ``oracledb.Connection``
    ✅ DO: Type against ``DriverHandle`` (structural)

Tags:
    protocol, connection, cursor, provider, oraspine, contracts

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from oraspine.oci.types import ConnectParams


@runtime_checkable
class DriverCursor(Protocol):
    """Minimal cursor interface (subset of DB-API 2.0)."""

    description: Any
    rowcount: int

    def execute(self, statement: str, parameters: Any = None) -> Any:
        """Execute SQL with optional bind parameters."""
        ...

    def fetchone(self) -> Any:
        """Fetch the next row or ``None``."""
        ...

    def fetchall(self) -> list:
        """Fetch all remaining rows."""
        ...

    def close(self) -> None:
        """Free the cursor."""
        ...


@runtime_checkable
class DriverHandle(Protocol):
    """Minimal session interface of a driver connection."""

    def cursor(self) -> DriverCursor:
        """Open a new cursor on this session."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction."""
        ...

    def ping(self) -> None:
        """Round trip to the server."""
        ...

    def close(self) -> None:
        """Close the session."""
        ...


@runtime_checkable
class ConnectionProvider(Protocol):
    """
    Issues and takes back driver handles.

    Implementations:
        StandaloneProvider — one fresh session per acquire, closed on release
        PooledProvider     — process-wide pools, handles returned on release
    """

    def acquire(self, params: ConnectParams) -> DriverHandle:
        """Open or borrow a session for ``params``."""
        ...

    def release(self, handle: DriverHandle) -> None:
        """Give a session back; it must not be used afterwards."""
        ...


__all__ = [
    "DriverCursor",
    "DriverHandle",
    "ConnectionProvider",
]
