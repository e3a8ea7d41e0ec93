"""Exception hierarchy, configuration and logging tests.

These tests verify:
- VisitableError is the base exception class
- Errors serialize with to_dict()
- VisitableConfig validates and reads the environment
- Logging functions are callable and attach structured fields
"""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from visitable.config import ERROR_MODE_ENV, UNKNOWN_SUFFIX_ENV


class TestExceptionHierarchy:
    """Test exception class hierarchy."""

    def test_visitable_error_is_base(self):
        from visitable import (
            DiscriminantResolutionError,
            HandlerNameConstructionError,
            HandlerTableLoadError,
            InvalidArgumentError,
            InvalidVisitorError,
            VisitableError,
        )

        for exc_class in [
            InvalidVisitorError,
            InvalidArgumentError,
            DiscriminantResolutionError,
            HandlerNameConstructionError,
            HandlerTableLoadError,
        ]:
            assert issubclass(exc_class, VisitableError)
            assert issubclass(exc_class, Exception)

    def test_to_dict(self):
        from visitable import InvalidArgumentError

        error = InvalidArgumentError("bad prefix", metadata={"argument_type": "int"})

        assert error.to_dict() == {
            "error_type": "InvalidArgumentError",
            "message": "bad prefix",
            "metadata": {"argument_type": "int"},
        }
        assert str(error) == "bad prefix"

    def test_metadata_defaults_to_empty(self):
        from visitable import VisitableError

        assert VisitableError("oops").metadata == {}


class TestVisitableConfig:
    """Test resolver configuration."""

    def test_defaults(self):
        from visitable import ErrorMode, VisitableConfig

        config = VisitableConfig()

        assert config.error_mode is ErrorMode.RAISE
        assert config.unknown_suffix == "UnknownVisited"

    def test_rejects_unknown_fields(self):
        from visitable import VisitableConfig

        with pytest.raises(ValidationError):
            VisitableConfig(prefix="accept")

    def test_rejects_empty_suffix(self):
        from visitable import VisitableConfig

        with pytest.raises(ValidationError):
            VisitableConfig(unknown_suffix="")

    def test_from_env(self, monkeypatch):
        from visitable import ErrorMode, VisitableConfig

        monkeypatch.setenv(ERROR_MODE_ENV, " LOG ")
        monkeypatch.setenv(UNKNOWN_SUFFIX_ENV, "Other")

        config = VisitableConfig.from_env()

        assert config.error_mode is ErrorMode.LOG
        assert config.unknown_suffix == "Other"

    def test_from_env_invalid_mode(self, monkeypatch):
        from visitable import VisitableConfig

        monkeypatch.setenv(ERROR_MODE_ENV, "ignore")

        with pytest.raises(ValidationError):
            VisitableConfig.from_env()

    def test_unknown_suffix_from_env_drives_fallback(self, monkeypatch, mah):
        from visitable import visit

        monkeypatch.setenv(UNKNOWN_SUFFIX_ENV, "Other")

        class Visitor:
            def acceptOther(self, visited, context):
                return "other"

        assert visit(mah, Visitor()) == "other"


class TestLogging:
    """Test logging functions."""

    def test_log_functions_callable(self):
        from visitable import log_debug, log_error, log_info, log_trace, log_warn

        log_error("Error message")
        log_warn("Warn with fields", {"key": "value"})
        log_info("Info message")
        log_debug("Debug with fields", {"count": 3})
        log_trace("Trace message")

    def test_fields_are_stringified(self, caplog):
        from visitable import log_info

        caplog.set_level(logging.INFO, logger="visitable")
        log_info("Registered", {"handlers": 3, "prefix": "accept"})

        record = caplog.records[-1]
        assert record.getMessage() == "Registered"
        assert record.fields == {"handlers": "3", "prefix": "accept"}

    def test_log_context_drops_none(self, caplog):
        from visitable import LogContext, log_warn

        caplog.set_level(logging.WARNING, logger="visitable")
        log_warn("Odd", LogContext(visited_type="Operator"))

        assert caplog.records[-1].fields == {"visited_type": "Operator"}

    def test_trace_level(self, caplog):
        from visitable.logging import TRACE, log_trace

        caplog.set_level(TRACE, logger="visitable")
        log_trace("very verbose")

        assert caplog.records[-1].levelname == "TRACE"

    def test_disabled_level_emits_nothing(self, caplog):
        from visitable import log_debug

        caplog.set_level(logging.INFO, logger="visitable")
        log_debug("hidden")

        assert not [r for r in caplog.records if r.getMessage() == "hidden"]

    def test_resolution_is_logged_at_debug(self, caplog, visitor, add):
        from visitable import visit

        caplog.set_level(logging.DEBUG, logger="visitable")
        visit(add, visitor, "acceptOperator")

        record = next(r for r in caplog.records if "Invoking" in r.getMessage())
        assert record.fields["handler_name"] == "acceptOperatorAdd"
        assert record.fields["discriminant"] == "Add"
        assert record.fields["visitor_type"] == "RecordingVisitor"
