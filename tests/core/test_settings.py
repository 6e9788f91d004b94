"""Tests for core.settings module.

Covers:
- OracleSettings defaults and ORACLE_* environment overrides
- Enum names for execute/auth modes
- SecretStr password handling
- connect() overrides and the pooled provider for persistent connections
- get_settings() caching
"""

from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from oraspine.core.settings import OracleSettings, clear_settings_cache, get_settings
from oraspine.oci.providers import PooledProvider
from oraspine.oci.types import AuthMode, ExecuteMode


class TestOracleSettingsDefaults:
    def test_defaults(self):
        s = OracleSettings()
        assert s.username == ""
        assert s.dsn == ""
        assert s.charset == ""
        assert s.execute_mode is ExecuteMode.COMMIT_ON_SUCCESS
        assert s.auth_mode is AuthMode.DEFAULT
        assert s.persistent is False
        assert (s.pool_min, s.pool_max, s.pool_increment) == (1, 4, 1)
        assert s.log_level == "INFO"
        assert s.log_json is None

    def test_password_is_secret(self, monkeypatch):
        monkeypatch.setenv("ORACLE_PASSWORD", "tiger")
        s = OracleSettings()
        assert s.password.get_secret_value() == "tiger"
        assert "tiger" not in repr(s)


class TestOracleSettingsEnvOverride:
    def test_connection_from_env(self, monkeypatch):
        monkeypatch.setenv("ORACLE_USERNAME", "scott")
        monkeypatch.setenv("ORACLE_DSN", "db.example.com/ORCLPDB1")
        monkeypatch.setenv("ORACLE_PERSISTENT", "true")
        s = OracleSettings()
        assert s.username == "scott"
        assert s.dsn == "db.example.com/ORCLPDB1"
        assert s.persistent is True

    @pytest.mark.parametrize(
        "raw, expected",
        [("NO_AUTO_COMMIT", ExecuteMode.NO_AUTO_COMMIT), ("commit_on_success", ExecuteMode.COMMIT_ON_SUCCESS)],
    )
    def test_execute_mode_from_env(self, monkeypatch, raw, expected):
        monkeypatch.setenv("ORACLE_EXECUTE_MODE", raw)
        assert OracleSettings().execute_mode is expected

    def test_auth_mode_by_name(self, monkeypatch):
        monkeypatch.setenv("ORACLE_AUTH_MODE", "sysdba")
        assert OracleSettings().auth_mode is AuthMode.SYSDBA

    def test_invalid_execute_mode(self, monkeypatch):
        monkeypatch.setenv("ORACLE_EXECUTE_MODE", "7")
        with pytest.raises(ValidationError):
            OracleSettings()

    def test_pool_bounds(self, monkeypatch):
        monkeypatch.setenv("ORACLE_POOL_MAX", "0")
        with pytest.raises(ValidationError):
            OracleSettings()

    def test_dotenv_file(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("ORACLE_DSN=from-dotenv/ORCLPDB1\n")
        monkeypatch.chdir(tmp_path)
        assert OracleSettings().dsn == "from-dotenv/ORCLPDB1"


class TestConnect:
    def _settings(self, **kwargs) -> OracleSettings:
        values = {"username": "scott", "password": "tiger", "dsn": "db/ORCLPDB1"}
        values.update(kwargs)
        return OracleSettings(**values)

    def test_connect_uses_settings(self, mock_connect):
        conn = self._settings(execute_mode="NO_AUTO_COMMIT").connect()
        mock_connect.assert_called_once_with(user="scott", password="tiger", dsn="db/ORCLPDB1", mode=0)
        assert conn.get_execute_mode() is ExecuteMode.NO_AUTO_COMMIT

    def test_overrides_take_precedence(self, mock_connect):
        conn = self._settings().connect(dsn="other/ORCLPDB2", username=None)
        assert conn.dsn == "other/ORCLPDB2"
        assert conn.params.username == "scott"

    def test_persistent_uses_sized_pool(self):
        s = self._settings(persistent=True, pool_min=2, pool_max=6)
        pool = MagicMock()
        pool.acquire.side_effect = [MagicMock(), MagicMock()]
        with patch("oracledb.create_pool", return_value=pool) as create_pool:
            s.connect()
            s.connect()

        create_pool.assert_called_once()
        assert create_pool.call_args.kwargs["min"] == 2
        assert create_pool.call_args.kwargs["max"] == 6
        assert isinstance(s.pooled_provider(), PooledProvider)
        assert s.pooled_provider() is s.pooled_provider()

    def test_explicit_provider_kept(self, mock_handle):
        provider = MagicMock()
        provider.acquire.return_value = mock_handle
        self._settings(persistent=True).connect(provider=provider)
        provider.acquire.assert_called_once()


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("ORACLE_DSN", "reloaded/ORCLPDB1")
        assert get_settings().dsn == first.dsn
        assert get_settings(_force_reload=True).dsn == "reloaded/ORCLPDB1"

    def test_clear_cache(self):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first
