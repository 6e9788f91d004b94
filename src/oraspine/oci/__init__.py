"""Oracle client objects -- Connection, Statement and connection providers.

Install the driver with ``pip install oracledb`` (thin mode needs no
Oracle Client libraries).

Architecture::

    Connection (connection.py)    One session; prepare/query/last_insert_id
        └── Statement             execute/fetch/fetch_column/close
    ConnectionProvider            acquire(params) -> handle, release(handle)
        ├── StandaloneProvider    oracledb.connect per Connection
        └── PooledProvider        process-wide oracledb pools (persistent=True)
    ErrorRecord (records.py)      Last driver error; NO_ERROR when absent
    ExecuteMode / AuthMode        Commit behaviour / session privilege
"""

from .connection import EMPTY_RESULT_MESSAGE, Connection
from .identifiers import validate_identifier
from .providers import PooledProvider, StandaloneProvider, persistent_provider
from .records import NO_ERROR, ErrorRecord
from .statement import Statement
from .types import DEFAULT_EXECUTE_MODE, AuthMode, ConnectParams, ExecuteMode

__all__ = [
    "Connection",
    "Statement",
    "ErrorRecord",
    "NO_ERROR",
    "ExecuteMode",
    "AuthMode",
    "DEFAULT_EXECUTE_MODE",
    "ConnectParams",
    "StandaloneProvider",
    "PooledProvider",
    "persistent_provider",
    "validate_identifier",
    "EMPTY_RESULT_MESSAGE",
]
