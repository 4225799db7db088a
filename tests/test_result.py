"""Tests for the result types and their combination."""

import pytest

from dataknobs_validator import Both, Failure, Success, TextMessage
from dataknobs_validator.result import combine, combine_all

A = TextMessage("a")
B = TextMessage("b")


class TestResults:
    """Test the three result variants."""

    def test_success(self):
        result = Success(1)
        assert result.is_success
        assert not result.is_failure
        assert result.has_value
        assert result.messages == []

    def test_failure_requires_messages(self):
        with pytest.raises(ValueError):
            Failure([])
        with pytest.raises(ValueError):
            Both(1, [])

    def test_both(self):
        result = Both(1, [A])
        assert result.is_failure
        assert result.has_value
        assert not result.is_success

    def test_with_message_replaces_messages(self):
        assert Both(1, [A, B]).with_message(B) == Both(1, [B])
        assert Failure([A, B]).with_message(B) == Failure([B])

    def test_to_result(self):
        """Test that Both becomes Failure at the public boundary."""
        assert Both(1, [A]).to_result() == Failure([A])
        assert Success(1).to_result() == Success(1)
        assert Failure([A]).to_result() == Failure([A])

    def test_to_failure(self):
        assert Both(1, [A]).to_failure() == Failure([A])
        with pytest.raises(ValueError):
            Success(1).to_failure()

    def test_prepend(self):
        assert Success(1).prepend([]) == Success(1)
        assert Success(1).prepend([A]) == Both(1, [A])
        assert Both(1, [B]).prepend([A]) == Both(1, [A, B])
        assert Failure([B]).prepend([A]) == Failure([A, B])


class TestCombine:
    """Test the combination rules."""

    def test_success_success_keeps_second(self):
        assert combine(Success(1), Success(2)) == Success(2)

    def test_failure_is_never_lost(self):
        assert combine(Success(1), Failure([A])) == Failure([A])
        assert combine(Failure([A]), Success(1)) == Failure([A])

    def test_failures_concatenate_in_order(self):
        assert combine(Failure([A]), Failure([B])).messages == [A, B]

    def test_both_propagates_value(self):
        assert combine(Both(1, [A]), Success(2)) == Both(2, [A])
        assert combine(Success(1), Both(2, [B])) == Both(2, [B])
        assert combine(Both(1, [A]), Both(2, [B])) == Both(2, [A, B])
        assert combine(Both(1, [A]), Failure([B])) == Failure([A, B])

    def test_combine_all(self):
        results = [Success(2), Both(3, [A]), Both(4, [B])]
        assert combine_all(results, Success(1)) == Both(4, [A, B])
