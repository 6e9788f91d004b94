"""Driver error records.

An ``ErrorRecord`` is the value read by ``Connection.error_info()`` and the
payload of every ``OciError``.  The "no error" shape is a record whose
``code`` is ``None`` (``NO_ERROR``), never an empty string or ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ErrorRecord:
    """Last error reported by the driver for a handle."""

    code: str | None = None
    message: str = ""
    offset: int = 0
    sql: str | None = None

    @property
    def is_error(self) -> bool:
        return self.code is not None

    @classmethod
    def absent(cls) -> ErrorRecord:
        return NO_ERROR

    @classmethod
    def from_driver(cls, exc: BaseException, sql: str | None = None) -> ErrorRecord:
        """Build a record from an ``oracledb.Error``.

        python-oracledb puts an error object in ``exc.args[0]`` exposing
        ``full_code`` (``"ORA-01017"``), ``message`` and ``offset``.
        """
        payload: Any = exc.args[0] if exc.args else None
        full_code = getattr(payload, "full_code", None)
        if full_code:
            message = getattr(payload, "message", None) or str(payload)
            offset = getattr(payload, "offset", 0) or 0
            return cls(code=str(full_code), message=message.strip(), offset=int(offset), sql=sql)

        # Errors raised without an error object (plain string args)
        message = str(payload) if payload is not None else exc.__class__.__name__
        return cls(code=exc.__class__.__name__, message=message.strip(), sql=sql)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "offset": self.offset, "sql": self.sql}


NO_ERROR = ErrorRecord()


__all__ = ["ErrorRecord", "NO_ERROR"]
