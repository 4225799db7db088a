"""Tests for the nullable adaptations."""

import pytest

from dataknobs_validator import Failure, Success, Validator
from dataknobs_validator.constraints import Length, Min


class TestNullable:
    """Test passing None through."""

    def test_none_passes(self):
        assert Validator.of(Min(0)).nullable().try_validate(None) == Success(None)

    def test_value_validated(self):
        result = Validator.of(Min(0)).nullable().try_validate(-1)
        assert isinstance(result, Failure)


class TestWithDefault:
    """Test substituting a default."""

    def test_default_substituted(self):
        assert Validator.of(Min(0)).with_default(3).try_validate(None) == Success(3)
        assert Validator.of(Min(0)).with_default(3).try_validate(7) == Success(7)

    def test_default_is_validated(self):
        result = Validator.of(Min(0)).with_default(-1).try_validate(None)
        assert [m.input for m in result.messages] == [-1]

    def test_factory(self):
        validator = Validator.success().with_default(factory=list)
        first = validator.try_validate(None).value
        second = validator.try_validate(None).value
        assert first == [] and first is not second

    def test_requires_default(self):
        with pytest.raises(ValueError):
            Validator.success().with_default()


class TestNotNull:
    """Test rejecting None."""

    def test_none_fails(self):
        result = Validator.of(Length(1, 3)).named("nick").not_null().try_validate(None)
        assert isinstance(result, Failure)
        message = result.messages[0]
        assert message.constraint_id == "nullable.not_null"
        assert message.text == "must not be null"

    def test_value_validated(self):
        assert Validator.of(Length(1, 3)).not_null().try_validate("abc") == Success("abc")
        assert Validator.of(Length(1, 3)).not_null().try_validate("abcd").messages[0].constraint_id == (
            "string.length_between"
        )
