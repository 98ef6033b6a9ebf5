"""Tests for the envscope exception hierarchy.

These tests verify:
1. Exception structure (code, message, details)
2. Inheritance hierarchy
3. String representation
4. Dictionary conversion for JSON serialization
"""

import pytest

from envscope.exceptions import (
    ConfigurationError,
    EnvscopeError,
    MissingKeyError,
    PropertiesParseError,
    ResourceNotFoundError,
    ValidationError,
)


class TestEnvscopeError:
    """Tests for the base EnvscopeError class."""

    def test_basic_construction(self):
        error = EnvscopeError("TEST_CODE", "Test message")

        assert error.code == "TEST_CODE"
        assert error.message == "Test message"
        assert error.details == {}

    def test_str_without_details(self):
        assert str(EnvscopeError("TEST_CODE", "Test message")) == "TEST_CODE: Test message"

    def test_str_with_details(self):
        result = str(EnvscopeError("TEST_CODE", "Test message", details={"foo": "bar"}))
        assert result == "TEST_CODE: Test message (details: {'foo': 'bar'})"

    def test_args_contains_message(self):
        assert "The error message" in EnvscopeError("CODE", "The error message").args

    def test_to_dict(self):
        error = EnvscopeError("TEST_CODE", "Test message", details={"key": "value"})
        assert error.to_dict() == {
            "code": "TEST_CODE",
            "message": "Test message",
            "details": {"key": "value"},
        }

    @pytest.mark.parametrize("cls", [ValidationError, ConfigurationError])
    def test_generic_subclasses(self, cls):
        error = cls("CODE", "message")
        assert isinstance(error, EnvscopeError)


class TestMissingKeyError:
    """Tests for MissingKeyError."""

    def test_structure(self):
        error = MissingKeyError("db.url", environment="PRODUCTION")

        assert error.code == "MISSING_KEY"
        assert error.key == "db.url"
        assert error.details == {"key": "db.url", "environment": "PRODUCTION"}

    def test_is_key_error(self):
        with pytest.raises(KeyError):
            raise MissingKeyError("db.url")

    def test_str_is_not_repr_quoted(self):
        assert str(MissingKeyError("db.url")) == (
            "MISSING_KEY: Property 'db.url' is not defined (details: {'key': 'db.url'})"
        )


class TestResourceNotFoundError:
    """Tests for ResourceNotFoundError."""

    def test_structure(self):
        error = ResourceNotFoundError("/app.xml", environment="TEST", searched=["/a", "/b"])

        assert error.code == "RESOURCE_NOT_FOUND"
        assert error.logical_path == "/app.xml"
        assert error.details == {
            "logical_path": "/app.xml",
            "environment": "TEST",
            "searched": ["/a", "/b"],
        }


class TestPropertiesParseError:
    """Tests for PropertiesParseError."""

    def test_is_configuration_error(self):
        error = PropertiesParseError("bad escape", source="environment.properties", line=4)

        assert isinstance(error, ConfigurationError)
        assert error.code == "PROPERTIES_PARSE_ERROR"
        assert error.details == {"source": "environment.properties", "line": 4}
        assert error.line == 4

    def test_without_location(self):
        error = PropertiesParseError("bad")
        assert error.details == {}
        assert error.source is None
