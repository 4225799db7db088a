"""Tests for the object factory."""

from dataclasses import dataclass

import pytest

from dataknobs_validator import (
    Custom,
    Failure,
    MessageError,
    ObjectFactory,
    Success,
    TextMessage,
    ValidationConfig,
    ValidationError,
    Validator,
)
from dataknobs_validator.constraints import Min, NotBlank


@dataclass
class User:
    name: str
    age: int

    def __post_init__(self):
        if self.name == "root":
            raise ValueError("reserved name")


def to_int():
    return Validator.success().map(int)


users = (
    ObjectFactory(User)
    .arg("name", Validator.of(NotBlank()))
    .arg("age", to_int() >> Validator.of(Min(0)))
)


class TestObjectFactory:
    """Test argument validation and construction."""

    def test_creates(self):
        assert users.create({"name": "Ada", "age": "36"}) == User("Ada", 36)
        assert users.try_create({"name": "Ada", "age": "36"}) == Success(User("Ada", 36))

    def test_collects_argument_failures(self):
        result = users.try_create({"name": " ", "age": "x"})
        assert isinstance(result, Failure)
        assert [m.path.full_name for m in result.messages] == ["name", "age"]
        assert [m.root for m in result.messages] == ["User", "User"]

    def test_fail_fast(self):
        result = users.try_create({"name": " ", "age": "x"}, ValidationConfig(fail_fast=True))
        assert [m.path.full_name for m in result.messages] == ["name"]

    def test_constructor_error_becomes_failure(self):
        result = users.try_create({"name": "root", "age": "1"})
        assert [m.constraint_id for m in result.messages] == ["factory.construct"]
        assert result.messages[0].text == "could not be constructed: reserved name"

    def test_constructor_message_error(self):
        def build(**kwargs):
            raise MessageError(TextMessage("no thanks"))

        factory = ObjectFactory(build, name="Thing").arg("a")
        result = factory.try_create({"a": 1})
        assert [m.text for m in result.messages] == ["no thanks"]

    def test_constructor_not_called_when_argument_missing_value(self):
        calls = []

        def build(**kwargs):
            calls.append(kwargs)
            return kwargs

        factory = ObjectFactory(build, name="Thing").arg("n", to_int())
        assert isinstance(factory.try_create({"n": "abc"}), Failure)
        assert calls == []

    def test_missing_key_reads_none(self):
        factory = ObjectFactory(dict, name="Thing").arg("n", Validator.of(Min(0)).not_null())
        result = factory.try_create({})
        assert [m.constraint_id for m in result.messages] == ["nullable.not_null"]

    def test_key_differs_from_name(self):
        factory = ObjectFactory(dict, name="Thing").arg("full_name", key="fullName")
        assert factory.create({"fullName": "Ada"}) == {"full_name": "Ada"}

    def test_then_check(self):
        adult = Custom("user.adult", lambda c: c.input.age >= 18, "must be an adult")
        factory = (
            ObjectFactory(User)
            .arg("name", Validator.of(NotBlank()))
            .arg("age", to_int())
            .then_check(Validator.of(adult))
        )
        assert factory.create({"name": "Ada", "age": "36"}) == User("Ada", 36)
        with pytest.raises(ValidationError) as exc_info:
            factory.create({"name": "Kid", "age": "10"})
        assert [m.constraint_id for m in exc_info.value.messages] == ["user.adult"]
