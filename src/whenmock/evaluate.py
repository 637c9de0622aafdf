"""Decides whether declared patterns match the arguments of a call."""
import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from .errors import ConfigurationError, MatcherAssertionError
from .util import log
from .verify import assert_equal, equals, is_asymmetric_matcher

ALL_ARGS_MISUSE = (
    "When using when.all_args, it must be the one and only matcher provided to called_with. "
    "You have incorrectly provided other matchers along with when.all_args."
)


def accepts_equals(fn) -> bool:
    """True if fn takes a second positional parameter to receive the equals function in."""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False
    positional = [p for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)]
    return len(positional) >= 2


@dataclass(frozen=True)
class Predicate:
    """A function used as a pattern: called with the actual argument, its truthiness is the match."""

    fn: Callable[..., Any]
    wants_equals: bool = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "wants_equals", accepts_equals(self.fn))

    def __call__(self, actual):
        if self.wants_equals:
            return bool(self.fn(actual, equals))
        return bool(self.fn(actual))

    @property
    def name(self):
        return getattr(self.fn, "__name__", repr(self.fn))

    def __repr__(self):
        return "when(%s)" % self.name


@dataclass(frozen=True, repr=False)
class AllArgsPredicate(Predicate):
    """
    A predicate that receives the list of all positional arguments at once.
    fn may also be an asymmetric matcher, which is then matched against that list.
    """

    def __call__(self, actual):
        if is_asymmetric_matcher(self.fn):
            return equals(actual, self.fn)
        return super().__call__(actual)

    def __repr__(self):
        return "when.all_args(%s)" % self.name


def predicate(fn) -> Predicate:
    if not callable(fn):
        raise TypeError("Expected a callable but got %r" % (fn,))
    return Predicate(fn)


def all_args(fn) -> AllArgsPredicate:
    if not callable(fn) and not is_asymmetric_matcher(fn):
        raise TypeError("Expected a callable or an asymmetric matcher but got %r" % (fn,))
    return AllArgsPredicate(fn)


def evaluate(pattern, actual, assert_on_mismatch=False) -> bool:
    if isinstance(pattern, AllArgsPredicate):
        raise ConfigurationError(ALL_ARGS_MISUSE)

    if isinstance(pattern, Predicate):
        is_match = pattern(actual)
        if not is_match and assert_on_mismatch:
            msg = "expected %r to match but received %r" % (pattern, actual)
            raise MatcherAssertionError(msg, expected=pattern, actual=actual)
        return is_match

    if assert_on_mismatch:
        return assert_equal(pattern, actual)
    return equals(actual, pattern)


def evaluate_all(pattern: AllArgsPredicate, args: Sequence, assert_on_mismatch=False) -> bool:
    actual = list(args)
    is_match = pattern(actual)
    if not is_match and assert_on_mismatch:
        msg = "expected %r to match all arguments but received %r" % (pattern, actual)
        raise MatcherAssertionError(msg, expected=pattern, actual=actual)
    return is_match


def uses_all_args(patterns: Sequence, kw_patterns: Mapping) -> bool:
    candidates = list(patterns) + list(kw_patterns.values())
    return any(isinstance(p, AllArgsPredicate) for p in candidates)


def shape_matches(patterns: Sequence, kw_patterns: Mapping, args: Sequence, kwargs: Mapping) -> bool:
    return len(args) == len(patterns) and set(kwargs) == set(kw_patterns)


def matches(patterns, kw_patterns, args, kwargs, assert_on_mismatch=False) -> bool:
    """
    Folds evaluate() over every position of a call, stopping at the first
    position that does not match. Calls of a different shape (argument count
    or keyword names) are rejected before any pattern is looked at, so an
    asserting rule never fails on a call it could not have been meant for.
    """
    if uses_all_args(patterns, kw_patterns):
        if len(patterns) != 1 or kw_patterns or not isinstance(patterns[0], AllArgsPredicate):
            raise ConfigurationError(ALL_ARGS_MISUSE)
        return evaluate_all(patterns[0], args, assert_on_mismatch)

    if not shape_matches(patterns, kw_patterns, args, kwargs):
        log.debug("Shape mismatch: %s positional, keywords %s", len(args), sorted(kwargs))
        return False

    for i, (pattern, actual) in enumerate(zip(patterns, args)):
        if not evaluate(pattern, actual, assert_on_mismatch):
            log.debug("No match at position %s: %r", i, actual)
            return False

    for key, pattern in kw_patterns.items():
        if not evaluate(pattern, kwargs[key], assert_on_mismatch):
            log.debug("No match for keyword %s: %r", key, kwargs[key])
            return False

    return True


def same_patterns(a: Sequence, b: Sequence) -> bool:
    """Structural equality of two pattern sequences, used to decide rule replacement."""
    if len(a) != len(b):
        return False
    return all(type(x) is type(y) and same_pattern(x, y) for x, y in zip(a, b))


def same_pattern(x, y):
    if x is y:
        return True
    if isinstance(x, (list, tuple)):
        return same_patterns(x, y)
    if isinstance(x, dict):
        return x.keys() == y.keys() and all(
            type(x[k]) is type(y[k]) and same_pattern(x[k], y[k]) for k in x
        )
    return bool(x == y)
