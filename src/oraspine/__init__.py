"""
oraspine - object-oriented Oracle connections over python-oracledb.

    from oraspine import Connection, ExecuteMode

    with Connection("scott", "tiger", "db.example.com/ORCLPDB1") as conn:
        one = conn.query("SELECT 1 FROM DUAL").fetch_column()
"""

__version__ = "0.1.0"

from oraspine.core.errors import (  # noqa: E402
    EmptyResultError,
    OciConnectionError,
    OciError,
    OciQueryError,
    OraSpineError,
)
from oraspine.oci import (  # noqa: E402
    NO_ERROR,
    AuthMode,
    Connection,
    ErrorRecord,
    ExecuteMode,
    Statement,
)

__all__ = [
    "__version__",
    "Connection",
    "Statement",
    "ErrorRecord",
    "NO_ERROR",
    "ExecuteMode",
    "AuthMode",
    "OraSpineError",
    "OciError",
    "OciConnectionError",
    "OciQueryError",
    "EmptyResultError",
]
