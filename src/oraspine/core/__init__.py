"""oraspine.core -- errors, logging, settings and protocols.

Architecture::

    errors.py       Typed error hierarchy (OraSpineError, OciError ...)
    logging.py      structlog configuration + get_logger()
    protocols.py    DriverHandle / DriverCursor / ConnectionProvider
    settings.py     OracleSettings (pydantic-settings, ORACLE_* env)

``settings`` is not imported here; it depends on ``oraspine.oci``.
"""

from oraspine.core.errors import (
    ConfigError,
    ConnectionClosedError,
    EmptyResultError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    InvalidIdentifierError,
    OciConnectionError,
    OciError,
    OciQueryError,
    OraSpineError,
    ValidationError,
)
from oraspine.core.logging import configure_logging, get_logger
from oraspine.core.protocols import ConnectionProvider, DriverCursor, DriverHandle

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
    "configure_logging",
    "get_logger",
    "ConnectionProvider",
    "DriverCursor",
    "DriverHandle",
]
