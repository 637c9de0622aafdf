"""
The fluent surface tests talk to.

    when(fn).called_with(1, 2).returns("three")
    when(fn).expect_called_with(when(is_even)).returns_once("even")
    when(fn).called_with(when.all_args(lambda args: sum(args) > 10)).runs(lambda *a: max(a))
"""
from __future__ import annotations

from .binding import Action, Binding
from .evaluate import Predicate, all_args
from .registry import Registry, is_mock, registry


class WhenMock(object):
    def __init__(self, fn, binding: Binding, owner: Registry):
        self.fn = fn
        self.binding = binding
        self._registry = owner

    def called_with(self, *patterns, **kw_patterns) -> CallMock:
        return CallMock(self, patterns, kw_patterns, assert_on_mismatch=False)

    def expect_called_with(self, *patterns, **kw_patterns) -> CallMock:
        """Like called_with, but a call of the same shape that does not match fails loudly."""
        return CallMock(self, patterns, kw_patterns, assert_on_mismatch=True)

    # Without called_with these apply to every call that no rule claims.
    def returns(self, value):
        self.binding.set_default(Action.value(value))
        return self

    def resolves(self, value):
        self.binding.set_default(Action.resolved(value))
        return self

    def rejects(self, err):
        self.binding.set_default(Action.rejected(err))
        return self

    def runs(self, implementation):
        self.binding.set_default(Action.implementation(implementation))
        return self

    # These only make sense next to at least one called_with rule.
    def default_returns(self, value):
        self.binding.set_default(Action.value(value), requires_rules=True)
        return self

    def default_resolves(self, value):
        self.binding.set_default(Action.resolved(value), requires_rules=True)
        return self

    def default_rejects(self, err):
        self.binding.set_default(Action.rejected(err), requires_rules=True)
        return self

    def default_runs(self, implementation):
        self.binding.set_default(Action.implementation(implementation), requires_rules=True)
        return self

    @property
    def rules(self):
        return list(self.binding.rules)

    def reset_when_mocks(self):
        self._registry.reset_one(self.fn)

    def __repr__(self):
        return "WhenMock(%r, rules=%s)" % (self.fn, len(self.binding.rules))


class CallMock(object):
    """A set of patterns on one mock, ready to be given one or more actions."""

    def __init__(self, when_mock: WhenMock, patterns, kw_patterns, assert_on_mismatch=False):
        self.when_mock = when_mock
        self.patterns = tuple(patterns)
        self.kw_patterns = dict(kw_patterns)
        self.assert_on_mismatch = assert_on_mismatch

    @property
    def fn(self):
        return self.when_mock.fn

    def _add(self, action, once=False):
        self.when_mock.binding.add_rule(
            self.patterns,
            self.kw_patterns,
            action,
            once=once,
            assert_on_mismatch=self.assert_on_mismatch,
        )
        return self

    def returns(self, value):
        return self._add(Action.value(value))

    def returns_once(self, value):
        return self._add(Action.value(value), once=True)

    def resolves(self, value):
        return self._add(Action.resolved(value))

    def resolves_once(self, value):
        return self._add(Action.resolved(value), once=True)

    def rejects(self, err):
        return self._add(Action.rejected(err))

    def rejects_once(self, err):
        return self._add(Action.rejected(err), once=True)

    def runs(self, implementation):
        return self._add(Action.implementation(implementation))

    def runs_once(self, implementation):
        return self._add(Action.implementation(implementation), once=True)

    def default_returns(self, value):
        self.when_mock.default_returns(value)
        return self

    def default_resolves(self, value):
        self.when_mock.default_resolves(value)
        return self

    def default_rejects(self, err):
        self.when_mock.default_rejects(err)
        return self

    def default_runs(self, implementation):
        self.when_mock.default_runs(implementation)
        return self

    def called_with(self, *patterns, **kw_patterns) -> CallMock:
        return self.when_mock.called_with(*patterns, **kw_patterns)

    def expect_called_with(self, *patterns, **kw_patterns) -> CallMock:
        return self.when_mock.expect_called_with(*patterns, **kw_patterns)

    def reset(self):
        """Forgets every rule declared for exactly these patterns."""
        self.when_mock.binding.remove_rules(self.patterns, self.kw_patterns)
        return self

    def reset_when_mocks(self):
        self.when_mock.reset_when_mocks()


def when(fn):
    """
    when(mock) returns the WhenMock used to declare rules for that mock,
    creating and registering it the first time. when(function) marks any other
    callable as a predicate matcher for use inside called_with.
    """
    if is_mock(fn):
        owner = registry()
        binding = owner.bind(fn)
        if binding.handle is None:
            binding.handle = WhenMock(fn, binding, owner)
        return binding.handle

    if callable(fn):
        return Predicate(fn)

    raise TypeError("when() expects a mock or a function but got %r" % (fn,))


when.all_args = all_args
