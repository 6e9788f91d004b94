"""Environment-driven settings for oraspine.

Manifesto:
    Connection parameters should come from the environment, be validated at
    startup and live in one place.  ``OracleSettings`` reads ``ORACLE_*``
    variables (and ``.env``) with pydantic-settings so the CLI and
    applications build connections the same way.

Features:
    - **OracleSettings:** credentials, dsn, modes, pool sizing, logging
    - **env_prefix ``ORACLE_``:** ``ORACLE_DSN``, ``ORACLE_USERNAME`` ...
    - **Enum names accepted:** ``ORACLE_EXECUTE_MODE=NO_AUTO_COMMIT``
    - **get_settings():** cached instance

Examples:
    >>> import os
    >>> os.environ["ORACLE_DSN"] = "db.example.com/ORCLPDB1"
    >>> get_settings(_force_reload=True).dsn
    'db.example.com/ORCLPDB1'

Tags:
    settings, configuration, pydantic, environment, oraspine

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field, PrivateAttr, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from oraspine.oci.types import AuthMode, ExecuteMode

if TYPE_CHECKING:
    from oraspine.oci.connection import Connection
    from oraspine.oci.providers import PooledProvider


class OracleSettings(BaseSettings):
    """Oracle connection settings read from ``ORACLE_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="ORACLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Connection ───────────────────────────────────────────────
    username: str = Field(default="")
    password: SecretStr = Field(default=SecretStr(""))
    dsn: str = Field(default="", description="host:port/service, TNS alias or EZConnect string")
    charset: str = Field(default="")
    execute_mode: ExecuteMode = Field(default=ExecuteMode.COMMIT_ON_SUCCESS)
    auth_mode: AuthMode = Field(default=AuthMode.DEFAULT)
    persistent: bool = Field(default=False)

    # ── Persistent pool ──────────────────────────────────────────
    pool_min: int = Field(default=1, ge=0)
    pool_max: int = Field(default=4, ge=1)
    pool_increment: int = Field(default=1, ge=1)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(default=None, description="None: JSON unless stderr is a tty")

    _provider: Any = PrivateAttr(default=None)

    @field_validator("execute_mode", mode="before")
    @classmethod
    def _execute_mode_by_name(cls, value: Any) -> Any:
        if isinstance(value, str) and value.upper() in ExecuteMode.__members__:
            return ExecuteMode[value.upper()]
        return value

    @field_validator("auth_mode", mode="before")
    @classmethod
    def _auth_mode_by_name(cls, value: Any) -> Any:
        if isinstance(value, str) and value.upper() in AuthMode.__members__:
            return AuthMode[value.upper()]
        return value

    def pooled_provider(self) -> PooledProvider:
        """The ``PooledProvider`` sized from the pool settings (one per settings object)."""
        if self._provider is None:
            from oraspine.oci.providers import PooledProvider

            self._provider = PooledProvider(
                min_size=self.pool_min,
                max_size=self.pool_max,
                increment=self.pool_increment,
            )
        return self._provider

    def connect(self, **overrides: Any) -> Connection:
        """Open a ``Connection`` from these settings.

        Keyword overrides take precedence (``username``, ``password``,
        ``dsn``, ``charset``, ``session_mode``, ``persistent``,
        ``auth_mode``, ``provider``).
        """
        from oraspine.oci.connection import Connection

        kwargs: dict[str, Any] = {
            "username": self.username,
            "password": self.password.get_secret_value(),
            "dsn": self.dsn,
            "charset": self.charset,
            "session_mode": self.execute_mode,
            "persistent": self.persistent,
            "auth_mode": self.auth_mode,
        }
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        if kwargs["persistent"] and "provider" not in kwargs:
            kwargs["provider"] = self.pooled_provider()
        return Connection(**kwargs)


_settings_cache: dict[str, OracleSettings] = {}


def get_settings(*, _force_reload: bool = False) -> OracleSettings:
    """Load, validate, and cache an :class:`OracleSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = OracleSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    _settings_cache.clear()


__all__ = [
    "OracleSettings",
    "get_settings",
    "clear_settings_cache",
]
