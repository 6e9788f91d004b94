"""Connection types: execution/auth mode enums and connect parameters."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from oraspine.core.errors import InvalidConfigError


class ExecuteMode(IntEnum):
    """Commit behaviour applied by every statement of a connection.

    Values match the classic OCI execute-mode flags.
    """

    NO_AUTO_COMMIT = 0
    COMMIT_ON_SUCCESS = 32


class AuthMode(IntEnum):
    """Session privilege requested at connect time (``oracledb.AUTH_MODE_*``)."""

    DEFAULT = 0
    SYSDBA = 0x00000002
    SYSOPER = 0x00000004
    SYSASM = 0x00008000
    SYSBKP = 0x00020000
    SYSDGD = 0x00040000
    SYSKMT = 0x00080000


DEFAULT_EXECUTE_MODE = ExecuteMode.COMMIT_ON_SUCCESS

# python-oracledb always uses UTF-8 on the wire
UTF8_CHARSETS = frozenset({"", "UTF8", "UTF-8", "AL32UTF8"})


def coerce_execute_mode(value: Any) -> ExecuteMode:
    """Accept an ``ExecuteMode``, its int value or its name."""
    if isinstance(value, ExecuteMode):
        return value
    if isinstance(value, str) and value.upper() in ExecuteMode.__members__:
        return ExecuteMode[value.upper()]
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return ExecuteMode(value)
        except ValueError:
            pass
    raise InvalidConfigError("execute_mode", value)


def coerce_auth_mode(value: Any) -> AuthMode:
    """Accept an ``AuthMode``, its int value or its name."""
    if isinstance(value, AuthMode):
        return value
    if isinstance(value, str) and value.upper() in AuthMode.__members__:
        return AuthMode[value.upper()]
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return AuthMode(value)
        except ValueError:
            pass
    raise InvalidConfigError("auth_mode", value)


def normalize_charset(charset: str | None) -> str:
    """Upper-case ``charset`` and reject anything other than UTF-8."""
    normalized = (charset or "").strip().upper()
    if normalized not in UTF8_CHARSETS:
        raise InvalidConfigError(
            "charset",
            charset,
            f"Unsupported charset {charset!r}: only UTF-8 (AL32UTF8) is available",
        )
    return normalized


@dataclass(frozen=True)
class ConnectParams:
    """
    Everything a provider needs to open a session.

    The password is excluded from ``repr`` so params can be logged.
    """

    username: str
    password: str = field(repr=False)
    dsn: str
    charset: str = ""
    auth_mode: AuthMode = AuthMode.DEFAULT

    def pool_key(self) -> tuple[str, str, str, str, int]:
        """Key identifying the persistent pool these params share.

        The password enters the key only as a SHA-256 digest.
        """
        digest = hashlib.sha256(self.password.encode("utf-8")).hexdigest()
        return (self.username.upper(), digest, self.dsn, self.charset, int(self.auth_mode))


__all__ = [
    "ExecuteMode",
    "AuthMode",
    "DEFAULT_EXECUTE_MODE",
    "ConnectParams",
    "coerce_execute_mode",
    "coerce_auth_mode",
    "normalize_charset",
]
