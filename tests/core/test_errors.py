"""Tests for oraspine.core.errors module."""

import pytest

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
from oraspine.oci.records import ErrorRecord


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        """Create context with no fields set."""
        ctx = ErrorContext()
        assert ctx.dsn is None
        assert ctx.sql is None
        assert ctx.metadata == {}
        assert ctx.to_dict() == {}

    def test_to_dict_excludes_none(self):
        """Only set fields appear in to_dict()."""
        ctx = ErrorContext(dsn="db/ORCLPDB1", sequence="my_seq", metadata={"attempt": 2})
        assert ctx.to_dict() == {"dsn": "db/ORCLPDB1", "sequence": "my_seq", "attempt": 2}


class TestOraSpineError:
    """Test the base error."""

    def test_defaults(self):
        error = OraSpineError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"
        assert error.category == ErrorCategory.INTERNAL
        assert error.retryable is False
        assert error.cause is None

    def test_cause_is_chained(self):
        """cause also becomes __cause__."""
        original = ValueError("bad")
        error = OraSpineError("wrapped", cause=original)
        assert error.cause is original
        assert error.__cause__ is original

    def test_with_context(self):
        """Known keys fill fields, unknown keys go to metadata."""
        error = OciQueryError("failed").with_context(sql="SELECT 1 FROM DUAL", attempt=3)
        assert isinstance(error, OciQueryError)
        assert error.context.sql == "SELECT 1 FROM DUAL"
        assert error.context.metadata == {"attempt": 3}

    def test_to_dict(self):
        error = OraSpineError(
            "failed",
            category=ErrorCategory.DATABASE,
            retryable=True,
            context=ErrorContext(dsn="db/ORCLPDB1"),
            cause=RuntimeError("boom"),
        )
        assert error.to_dict() == {
            "error_type": "OraSpineError",
            "message": "failed",
            "category": "DATABASE",
            "retryable": True,
            "context": {"dsn": "db/ORCLPDB1"},
            "cause": "boom",
        }


class TestConfigErrors:
    def test_invalid_config(self):
        error = InvalidConfigError("execute_mode", 7)
        assert isinstance(error, ConfigError)
        assert error.category == ErrorCategory.CONFIG
        assert error.message == "Invalid configuration for execute_mode: 7"
        assert error.key == "execute_mode"
        assert error.value == 7

    def test_custom_message(self):
        assert InvalidConfigError("charset", "X", "nope").message == "nope"


class TestValidationErrors:
    def test_invalid_identifier(self):
        error = InvalidIdentifierError("a;b", "letter followed by letters, digits or underscores")
        assert isinstance(error, ValidationError)
        assert error.category == ErrorCategory.VALIDATION
        assert error.message == "Invalid SQL identifier: 'a;b'"

        data = error.to_dict()
        assert data["field"] == "identifier"
        assert data["value"] == "'a;b'"
        assert data["constraint"].startswith("letter")


class TestOciErrors:
    """Test database errors built from driver records."""

    @pytest.mark.parametrize(
        "cls", [OciConnectionError, ConnectionClosedError, OciQueryError, EmptyResultError]
    )
    def test_hierarchy(self, cls):
        error = cls("x")
        assert isinstance(error, OciError)
        assert error.category == ErrorCategory.DATABASE
        assert error.retryable is False
        assert error.code is None

    def test_from_record(self):
        record = ErrorRecord(code="ORA-00942", message="ORA-00942: table or view does not exist", offset=14)
        error = OciQueryError.from_record(record, context=ErrorContext(sql="SELECT * FROM nope"))

        assert isinstance(error, OciQueryError)
        assert error.code == "ORA-00942"
        assert error.message == record.message
        assert error.record is record

        data = error.to_dict()
        assert data["code"] == "ORA-00942"
        assert data["offset"] == 14
        assert data["context"] == {"sql": "SELECT * FROM nope"}
        assert "ORA-00942" in repr(error)

    def test_from_record_custom_message(self):
        record = ErrorRecord(code="ORA-01017", message="invalid credential")
        error = OciConnectionError.from_record(record, "Login failed")
        assert error.message == "Login failed"
        assert error.code == "ORA-01017"

    def test_explicit_code_wins(self):
        record = ErrorRecord(code="ORA-1", message="m")
        assert OciError("m", code="DPY-1", record=record).code == "DPY-1"

    def test_to_dict_without_record(self):
        data = EmptyResultError("empty").to_dict()
        assert "code" not in data
        assert "offset" not in data
