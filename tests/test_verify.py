from collections import namedtuple
from unittest.mock import ANY, Mock

import pytest

from whenmock import MatcherAssertionError
from whenmock.matchers import any_of, string_containing
from whenmock.verify import assert_equal, equals, is_asymmetric_matcher


def test_equals_scalars():
    assert equals(1, 1)
    assert not equals(2, 1)
    assert equals("a", "a")
    assert equals(None, None)


def test_equals_nested_structures():
    assert equals({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})
    assert not equals({"a": [1, {"b": 3}]}, {"a": [1, {"b": 2}]})
    assert not equals({"a": 1, "extra": 2}, {"a": 1})


def test_equals_distinguishes_lists_from_tuples():
    assert equals((1, 2), (1, 2))
    assert not equals([1, 2], (1, 2))


def test_equals_delegates_to_asymmetric_matchers_at_any_depth():
    assert equals({"id": 7, "name": "bob"}, {"id": any_of(int), "name": string_containing("o")})
    assert not equals({"id": "7", "name": "bob"}, {"id": any_of(int), "name": string_containing("o")})


def test_equals_understands_mock_any():
    assert equals([1, "x"], [ANY, "x"])
    assert equals({"k": object()}, {"k": ANY})


def test_mocks_are_never_asymmetric_matchers():
    m = Mock()
    assert not is_asymmetric_matcher(m)
    assert equals(m, m)
    assert not equals(Mock(), m)


def test_assert_equal_passes_silently():
    assert assert_equal(1, 1) is True


def test_assert_equal_reports_expected_and_received():
    with pytest.raises(MatcherAssertionError, match="expected 1 but received 2") as e:
        assert_equal(1, 2)

    assert e.value.expected == 1
    assert e.value.actual == 2


def test_assert_equal_adds_a_diff_for_containers():
    with pytest.raises(MatcherAssertionError) as e:
        assert_equal({"a": 1, "b": 2}, {"a": 1, "b": 3})

    msg = str(e.value)
    assert "- {'a': 1, 'b': 2}" in msg
    assert "+ {'a': 1, 'b': 3}" in msg


def test_equals_accepts_subclasses_of_lists_and_tuples():
    class Args(list):
        pass

    Point = namedtuple("Point", "x y")

    assert equals(Args([1, 2]), [1, 2])
    assert equals(Point(1, 2), (1, 2))
    assert not equals(Point(1, 2), [1, 2])
