"""Structural equality that understands asymmetric matchers, plus the assertion built on it."""
from unittest.mock import NonCallableMock

from .errors import MatcherAssertionError
from .util.str_util import describe_value, pretty_diff


def is_asymmetric_matcher(expected):
    # mocks answer every attribute lookup, so they are never matchers
    if isinstance(expected, NonCallableMock):
        return False
    return callable(getattr(expected, "asymmetric_match", None)) and not isinstance(expected, type)


def equals_dict(actual, expected):
    if set(expected.keys()) != set(actual.keys()):
        return False
    for key in expected.keys():
        if not equals(actual[key], expected[key]):
            return False
    return True


def equals_sequence(actual, expected):
    if len(expected) != len(actual):
        return False
    for actual_entry, expected_entry in zip(actual, expected):
        if not equals(actual_entry, expected_entry):
            return False
    return True


def equals(actual, expected):
    """
    Returns True if actual is structurally equal to expected.

    expected may be (or contain, at any depth inside dicts, lists and tuples)
    an asymmetric matcher: an object with an asymmetric_match(actual) method,
    which then decides instead of the structural comparison. Everything else
    is compared with ==, expected first, so objects like unittest.mock.ANY
    keep working too.
    """
    if is_asymmetric_matcher(expected):
        return bool(expected.asymmetric_match(actual))
    elif isinstance(expected, dict):
        return isinstance(actual, dict) and equals_dict(actual, expected)
    elif isinstance(expected, list):
        return isinstance(actual, list) and equals_sequence(actual, expected)
    elif isinstance(expected, tuple):
        return isinstance(actual, tuple) and equals_sequence(actual, expected)
    else:
        return bool(expected == actual)


def mismatch_message(expected, actual):
    msg = "expected %s but received %s" % (describe_value(expected), describe_value(actual))
    diff = pretty_diff(expected, actual)
    if diff:
        msg += "\n\n" + diff
    return msg


def assert_equal(expected, actual):
    if not equals(actual, expected):
        raise MatcherAssertionError(mismatch_message(expected, actual), expected=expected, actual=actual)
    return True
