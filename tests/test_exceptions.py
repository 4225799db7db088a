"""Tests for the exception hierarchy."""

import pytest
from dataknobs_common import ConfigurationError as CommonConfigurationError
from dataknobs_common import DataknobsError
from dataknobs_common import ValidationError as CommonValidationError

from dataknobs_validator import (
    ConfigurationError,
    MessageError,
    MessageNotFoundError,
    TextMessage,
    ValidationError,
    ValidatorError,
)
from dataknobs_validator.path import Path


class TestValidatorError:
    """Test the base ValidatorError class."""

    def test_basic_exception(self):
        """Test basic exception without context."""
        error = ValidatorError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.context == {}
        assert error.details == {}

    def test_details_takes_precedence(self):
        """Test that details parameter takes precedence over context."""
        error = ValidatorError("Error", context={"key": "context"}, details={"key": "details"})
        assert error.context == {"key": "details"}
        assert error.details is error.context

    def test_hierarchy(self):
        """Test that all package errors derive from ValidatorError."""
        for cls in (ValidationError, ConfigurationError, MessageNotFoundError, MessageError):
            assert issubclass(cls, ValidatorError)
        assert issubclass(MessageNotFoundError, ConfigurationError)

    def test_builds_on_common_exceptions(self):
        """Test that callers can catch the shared dataknobs exception types."""
        assert issubclass(ValidatorError, DataknobsError)
        assert issubclass(ValidationError, CommonValidationError)
        assert issubclass(ConfigurationError, CommonConfigurationError)
        with pytest.raises(CommonConfigurationError) as exc_info:
            raise MessageNotFoundError("missing.key")
        assert exc_info.value.context == {"key": "missing.key"}


class TestValidationError:
    """Test ValidationError message reporting."""

    def test_carries_messages(self):
        """Test that messages are kept and rendered with their paths."""
        path = Path.root().append("user").append("age")
        messages = [
            TextMessage("must be positive", path=path),
            TextMessage("is invalid"),
        ]
        error = ValidationError(messages)
        assert error.messages == messages
        assert str(error) == "user.age: must be positive; is invalid"

    def test_raise_and_catch(self):
        """Test raising as a regular exception."""
        with pytest.raises(ValidatorError):
            raise ValidationError([TextMessage("bad")])


class TestMessageNotFoundError:
    """Test MessageNotFoundError."""

    def test_key_in_context(self):
        error = MessageNotFoundError("missing.key")
        assert error.key == "missing.key"
        assert error.context == {"key": "missing.key"}
        assert "missing.key" in str(error)


class TestMessageError:
    """Test MessageError."""

    def test_wraps_message(self):
        message = TextMessage("cannot parse")
        error = MessageError(message)
        assert error.message is message
        assert str(error) == "cannot parse"
