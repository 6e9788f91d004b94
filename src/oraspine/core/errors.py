"""
Structured error types for oraspine.

Every failure raised by oraspine is an ``OraSpineError`` subclass carrying a
category, a retryable flag, structured context and the chained driver
exception.  Database failures additionally carry the driver's error record
(code, message, offset) so callers can branch on ``ORA-`` codes without
parsing messages.

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different failures
    - **Driver Records Preserved:** Every database error keeps its ``ORA-`` code
    - **Rich Context:** Errors carry dsn/sql/sequence metadata for logging
    - **Error Chaining:** Original ``oracledb`` exceptions stay on ``__cause__``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      OraSpineError                           │
        │  (category, retryable, context, cause)                       │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ConfigError        ValidationError        OciError          │
        │  (CONFIG)           (VALIDATION)           (DATABASE)        │
        │      │                   │                     │             │
        │  InvalidConfigError InvalidIdentifierError OciConnectionError│
        │                                            ConnectionClosed  │
        │                                            OciQueryError     │
        │                                            EmptyResultError  │
        └─────────────────────────────────────────────────────────────┘

Examples:
    Mapping a driver error record to a typed error:

    >>> from oraspine.oci.records import ErrorRecord
    >>> record = ErrorRecord(code="ORA-01017", message="invalid credential")
    >>> err = OciConnectionError.from_record(record)
    >>> err.code
    'ORA-01017'

    Adding context fluently:

    >>> OciQueryError("boom").with_context(sql="SELECT 1 FROM DUAL").context.sql
    'SELECT 1 FROM DUAL'

Guardrails:
    ❌ DON'T: Raise bare ``oracledb.Error`` out of oraspine
    ✅ DO: Wrap it with ``OciError.from_record(..., cause=exc)``

    ❌ DON'T: Put passwords into ``ErrorContext``
    ✅ DO: Use ``ConnectParams`` repr, which redacts the password

Tags:
    error-handling, exception-hierarchy, oracle, error-context, oraspine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from oraspine.oci.records import ErrorRecord


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    DATABASE = "DATABASE"  # Connect, execute, fetch
    VALIDATION = "VALIDATION"  # Bad identifiers, bad input
    CONFIG = "CONFIG"  # Invalid settings
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only fields that are set end up in ``to_dict()``; anything that has no
    dedicated field goes into ``metadata``.

    Attributes:
        dsn: Connect string the failing connection used
        sql: SQL text being prepared or executed
        sequence: Sequence name for ``last_insert_id`` failures
        metadata: Additional key-value pairs
    """

    dsn: str | None = None
    sql: str | None = None
    sequence: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["dsn", "sql", "sequence"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class OraSpineError(Exception):
    """
    Base exception for all oraspine errors.

    Subclasses set ``default_category`` and ``default_retryable`` so that
    call sites only pass what differs from the defaults.

    Examples:
        >>> error = OraSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.retryable
        False

        >>> try:
        ...     raise ConnectionError("DNS lookup failed")
        ... except ConnectionError as e:
        ...     error = OraSpineError("Network error", cause=e)
        >>> error.cause
        ConnectionError('DNS lookup failed')
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> OraSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise OciQueryError("Failed").with_context(sql=sql, dsn=dsn)
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }

        if self.context:
            context_dict = self.context.to_dict()
            if context_dict:
                result["context"] = context_dict

        if self.cause is not None:
            result["cause"] = str(self.cause)

        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(OraSpineError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(OraSpineError):
    """
    Input validation error.

    Never retryable - the input must be fixed.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


class InvalidIdentifierError(ValidationError):
    """SQL identifier does not match the allowed grammar."""

    def __init__(self, value: Any, constraint: str):
        super().__init__(
            f"Invalid SQL identifier: {value!r}",
            field="identifier",
            value=value,
            constraint=constraint,
        )


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class OciError(OraSpineError):
    """
    Database error carrying the driver's error record.

    ``code`` is the driver code string (``"ORA-01017"``) or ``None`` for
    errors that did not come from the driver, such as ``EmptyResultError``.
    """

    default_category = ErrorCategory.DATABASE
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        record: ErrorRecord | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.record = record
        self.code = code if code is not None else (record.code if record else None)

    @classmethod
    def from_record(
        cls,
        record: ErrorRecord,
        message: str | None = None,
        **kwargs: Any,
    ) -> OciError:
        """Build a typed error from a driver error record."""
        return cls(message or record.message, record=record, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.code is not None:
            result["code"] = self.code
        if self.record is not None and self.record.offset:
            result["offset"] = self.record.offset
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code!r})"


class OciConnectionError(OciError):
    """The driver could not open a session."""


class ConnectionClosedError(OciError):
    """Operation attempted on a connection or statement that was closed."""


class OciQueryError(OciError):
    """The driver failed to prepare, execute, fetch or commit."""


class EmptyResultError(OciError):
    """A query that must return a value returned no row."""


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "OraSpineError",
    "ConfigError",
    "InvalidConfigError",
    "ValidationError",
    "InvalidIdentifierError",
    "OciError",
    "OciConnectionError",
    "ConnectionClosedError",
    "OciQueryError",
    "EmptyResultError",
]
