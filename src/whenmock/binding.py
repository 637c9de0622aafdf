from __future__ import annotations

import inspect
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional
from unittest.mock import DEFAULT, AsyncMock

from . import events
from .errors import ConfigurationError, RejectedValue
from .evaluate import matches, same_pattern, same_patterns
from .util import log
from .util.str_util import describe_patterns

VALUE = "value"
IMPLEMENTATION = "implementation"
RESOLVED = "resolved"
REJECTED = "rejected"

DEFAULT_ONLY_MSG = (
    "A default was set with default_returns/default_runs/default_resolves/default_rejects "
    "but no called_with rule was ever added, so the stub can never behave differently "
    "depending on its arguments. Add a called_with(...) rule or use returns()/runs() directly."
)


async def _resolve(value):
    return value


async def _reject(err):
    if _is_exception(err):
        raise err
    raise RejectedValue(err)


@dataclass(frozen=True)
class Action:
    kind: str
    payload: Any

    def __call__(self, args, kwargs):
        if self.kind == VALUE:
            return self.payload
        if self.kind == IMPLEMENTATION:
            return self.payload(*args, **kwargs)
        # coroutines are created per call so nothing is raised before the stub is invoked
        if self.kind == RESOLVED:
            return _resolve(self.payload)
        if self.kind == REJECTED:
            return _reject(self.payload)
        raise ValueError("Unknown action kind: %s" % self.kind)

    @classmethod
    def value(cls, value):
        return cls(VALUE, value)

    @classmethod
    def implementation(cls, fn):
        if not callable(fn):
            raise TypeError("Expected a callable implementation but got %r" % (fn,))
        return cls(IMPLEMENTATION, fn)

    @classmethod
    def resolved(cls, value):
        return cls(RESOLVED, value)

    @classmethod
    def rejected(cls, err):
        return cls(REJECTED, err)


@dataclass(eq=False)
class Rule:
    patterns: tuple
    kw_patterns: dict
    action: Action
    once: bool = False
    assert_on_mismatch: bool = False
    sequence_id: int = 0
    called: bool = False
    source_location: str = ""

    @property
    def consumed(self) -> bool:
        return self.once and self.called

    def same_patterns_as(self, patterns, kw_patterns) -> bool:
        return same_patterns(self.patterns, patterns) and same_pattern(self.kw_patterns, kw_patterns)

    def sort_key(self):
        # once rules go first, then declaration order
        return (not self.once, self.sequence_id)

    def describe(self) -> str:
        kind = "once" if self.once else "always"
        return "%s -> %s %s" % (describe_patterns(self.patterns, self.kw_patterns), self.action.kind, kind)


@dataclass(frozen=True)
class OriginalBehavior:
    """What a mock did before it was bound, as far as a side effect can reproduce it."""

    side_effect: Any = None
    has_own_result: bool = False

    @classmethod
    def snapshot(cls, mock) -> OriginalBehavior:
        return cls(side_effect=mock.side_effect, has_own_result=_has_own_result(mock))

    def __call__(self, args, kwargs):
        effect = self.side_effect
        if effect is not None:
            if _is_exception(effect):
                raise effect
            if not callable(effect):
                result = next(effect)
                if _is_exception(result):
                    raise result
                return result
            return effect(*args, **kwargs)
        if self.has_own_result:
            # the mock itself produces its configured return_value / wraps target
            return DEFAULT
        return None


def _is_exception(obj):
    return isinstance(obj, BaseException) or (isinstance(obj, type) and issubclass(obj, BaseException))


def _has_own_result(mock):
    if mock._mock_wraps is not None or mock._mock_return_value is not DEFAULT:
        return True
    delegate = mock._mock_delegate
    return delegate is not None and delegate.return_value is not DEFAULT


@dataclass(eq=False)
class Binding:
    """The dispatch state attached to one mock."""

    mock: Any
    capture_call_site: Callable[..., str]
    call_site_context: int = 1
    rules: list = field(default_factory=list)
    default_action: Optional[Action] = None
    requires_rules: bool = False
    original: OriginalBehavior = field(default_factory=OriginalBehavior)
    # the fluent WhenMock wrapping this binding, so when(fn) keeps returning the same one
    handle: Any = None
    _next_id: int = 0
    _lock: Any = field(default_factory=threading.RLock, repr=False)

    @classmethod
    def create(cls, mock, capture_call_site, call_site_context=1) -> Binding:
        binding = cls(mock=mock, capture_call_site=capture_call_site, call_site_context=call_site_context)
        binding.original = OriginalBehavior.snapshot(mock)
        return binding

    def add_rule(self, patterns, kw_patterns, action, once=False, assert_on_mismatch=False) -> Rule:
        with self._lock:
            rule = Rule(
                patterns=tuple(patterns),
                kw_patterns=dict(kw_patterns),
                action=action,
                once=once,
                assert_on_mismatch=assert_on_mismatch,
                sequence_id=self._next_id,
                source_location=self.capture_call_site(self.call_site_context),
            )
            self._next_id += 1
            # an unlimited rule replaces the unlimited rule for the very same patterns, once rules pile up
            self.rules = [
                r for r in self.rules
                if once or r.once or not r.same_patterns_as(rule.patterns, rule.kw_patterns)
            ]
            self.rules.append(rule)
            self.rules.sort(key=Rule.sort_key)
            self.compile()

        log.debug("Declared %s at %s", rule.describe(), rule.source_location)
        events.emit(events.RULE_DECLARED, self, rule=rule)
        return rule

    def remove_rules(self, patterns, kw_patterns):
        with self._lock:
            self.rules = [r for r in self.rules if not r.same_patterns_as(tuple(patterns), dict(kw_patterns))]
            self.compile()

    def set_default(self, action: Action, requires_rules=False):
        with self._lock:
            self.default_action = action
            self.requires_rules = requires_rules
            self.compile()
        log.debug("Default set to %s (requires rules: %s)", action.kind, requires_rules)

    def compile(self):
        """Points the mock's side effect at whatever should currently run for a call."""
        if self.requires_rules and not self.rules:
            self.mock.side_effect = self._fail_without_rules
        elif isinstance(self.mock, AsyncMock):
            # AsyncMock awaits a coroutine function side effect, anything else is returned as is
            self.mock.side_effect = self.dispatch_async
        else:
            self.mock.side_effect = self.dispatch

    def restore(self):
        self.mock.side_effect = self.original.side_effect

    def _fail_without_rules(self, *args, **kwargs):
        raise ConfigurationError(DEFAULT_ONLY_MSG)

    def select(self, args, kwargs) -> Optional[Rule]:
        """Finds the rule for a call and marks it called, atomically."""
        with self._lock:
            for rule in self.rules:
                if rule.consumed:
                    continue
                if matches(rule.patterns, rule.kw_patterns, args, kwargs, rule.assert_on_mismatch):
                    rule.called = True
                    return rule
        return None

    def dispatch(self, *args, **kwargs):
        rule = self.select(args, kwargs)
        if rule is not None:
            log.debug("Matched %s", rule.describe())
            events.emit(events.RULE_MATCHED, self, rule=rule, args=args, kwargs=kwargs)
            return rule.action(args, kwargs)

        if self.default_action is not None:
            log.debug("No rule matched, using default %s", self.default_action.kind)
            return self.default_action(args, kwargs)

        log.debug("No rule matched, falling back to original behavior")
        return self.original(args, kwargs)

    async def dispatch_async(self, *args, **kwargs):
        result = self.dispatch(*args, **kwargs)
        if inspect.isawaitable(result):
            return await result
        return result
