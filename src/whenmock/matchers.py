"""Built-in asymmetric matchers for use as patterns"""
import re
from math import fabs

from .verify import equals

DEFAULT_APPROXIMATE_THRESHOLD = 0.05  # default margin of error for a value to still be considered equal to another


class AsymmetricMatcher(object):
    """
    Base for pattern objects that decide a match themselves.

    Comparing a matcher against another matcher is structural (same type,
    same state), comparing it against anything else runs asymmetric_match.
    """

    def asymmetric_match(self, actual):
        raise NotImplementedError

    def _state(self):
        return vars(self)

    def __eq__(self, other):
        if isinstance(other, AsymmetricMatcher):
            return type(other) is type(self) and self._state() == other._state()
        return bool(self.asymmetric_match(other))

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = None

    def __repr__(self):
        args = ", ".join(repr(v) for v in self._state().values())
        return "%s(%s)" % (type(self).__name__, args)


class Anything(AsymmetricMatcher):
    """Matches anything but None."""

    def asymmetric_match(self, actual):
        return actual is not None


class AnyOf(AsymmetricMatcher):
    def __init__(self, *types):
        if not types:
            raise TypeError("any_of() needs at least one type")
        self.types = types

    def asymmetric_match(self, actual):
        # bool subclasses int, only match it when asked for explicitly
        if isinstance(actual, bool) and bool not in self.types:
            return False
        return isinstance(actual, self.types)

    def __repr__(self):
        return "AnyOf(%s)" % ", ".join(t.__name__ for t in self.types)


class StringContaining(AsymmetricMatcher):
    def __init__(self, expected):
        self.expected = expected

    def asymmetric_match(self, actual):
        return isinstance(actual, str) and self.expected in actual


class StringMatching(AsymmetricMatcher):
    def __init__(self, pattern):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def asymmetric_match(self, actual):
        return isinstance(actual, str) and self.pattern.search(actual) is not None

    def __repr__(self):
        return "StringMatching(%r)" % self.pattern.pattern


class Approximately(AsymmetricMatcher):
    def __init__(self, expected, threshold=DEFAULT_APPROXIMATE_THRESHOLD):
        self.expected = expected
        self.threshold = threshold

    def asymmetric_match(self, actual):
        if isinstance(actual, bool) or not isinstance(actual, (int, float)):
            return False
        abs_threshold = fabs(self.expected * self.threshold)
        delta = fabs(self.expected - actual)
        return delta <= abs_threshold


class LengthOf(AsymmetricMatcher):
    def __init__(self, expected):
        self.expected = expected

    def asymmetric_match(self, actual):
        try:
            actual_len = len(actual)
        except TypeError:
            return False
        return equals(actual_len, self.expected)


class OneOf(AsymmetricMatcher):
    def __init__(self, *choices):
        self.choices = choices

    def asymmetric_match(self, actual):
        return actual in self.choices


class Not(AsymmetricMatcher):
    def __init__(self, matcher):
        self.matcher = matcher

    def asymmetric_match(self, actual):
        return not equals(actual, self.matcher)


def anything():
    return Anything()


def any_of(*types):
    return AnyOf(*types)


def string_containing(expected):
    return StringContaining(expected)


def string_matching(pattern):
    return StringMatching(pattern)


def approximately(expected, threshold=DEFAULT_APPROXIMATE_THRESHOLD):
    return Approximately(expected, threshold)


def length_of(expected):
    return LengthOf(expected)


def one_of(*choices):
    return OneOf(*choices)


def not_(matcher):
    return Not(matcher)
