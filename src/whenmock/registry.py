from __future__ import annotations

import threading
from contextlib import contextmanager
from unittest.mock import NonCallableMock

from . import events
from .binding import Binding
from .call_site import capture_call_site, no_call_site
from .config import Settings, conf_get, create_config
from .errors import VerificationError
from .util import log
from .util.str_util import indent


def is_mock(fn) -> bool:
    return isinstance(fn, NonCallableMock) or isinstance(getattr(fn, "mock", None), NonCallableMock)


def resolve_mock(fn):
    """Autospecced functions carry their mock in .mock, everything else is the mock itself."""
    if isinstance(fn, NonCallableMock):
        return fn
    inner = getattr(fn, "mock", None)
    if isinstance(inner, NonCallableMock):
        return inner
    raise TypeError("Expected a unittest.mock object but got %r" % (fn,))


class Registry(object):
    """
    The table of currently bound mocks.

    Bindings are keyed by the identity of the underlying mock, so binding an
    autospecced function and its .mock gives the same Binding.
    """

    def __init__(self, config=None, capture=None):
        self.config = config if config is not None else create_config()
        if capture is None:
            capture = capture_call_site if conf_get(self.config, Settings.CAPTURE_CALL_SITES) else no_call_site
        self.capture = capture
        self._bindings: dict[int, Binding] = {}
        self._lock = threading.RLock()

    @classmethod
    def create(cls, *dicts, capture=None) -> Registry:
        return cls(create_config(*dicts), capture=capture)

    def bind(self, fn) -> Binding:
        mock = resolve_mock(fn)
        with self._lock:
            binding = self._bindings.get(id(mock))
            if binding is not None:
                return binding
            binding = Binding.create(
                mock,
                capture_call_site=self.capture,
                call_site_context=conf_get(self.config, Settings.CALL_SITE_CONTEXT),
            )
            self._bindings[id(mock)] = binding
            self._hook_reset_mock(mock)

        log.debug("Bound %r", mock)
        events.emit(events.BINDING_CREATED, binding, mock=mock)
        return binding

    def _hook_reset_mock(self, mock):
        """Makes mock.reset_mock() drop the binding as well."""
        original_reset = mock.reset_mock

        def reset_mock(*args, **kwargs):
            self.reset_one(mock)
            return original_reset(*args, **kwargs)

        # straight into the instance dict, spec_set mocks reject unknown attributes
        vars(mock)["reset_mock"] = reset_mock

    def is_bound(self, fn) -> bool:
        return is_mock(fn) and id(resolve_mock(fn)) in self._bindings

    def binding_for(self, fn):
        return self._bindings.get(id(resolve_mock(fn)))

    def bindings(self) -> list[Binding]:
        with self._lock:
            return list(self._bindings.values())

    def reset_one(self, fn):
        mock = resolve_mock(fn)
        with self._lock:
            binding = self._bindings.pop(id(mock), None)
        if binding is None:
            return
        binding.restore()
        vars(mock).pop("reset_mock", None)
        log.debug("Reset %r", mock)
        events.emit(events.BINDING_RESET, binding, mock=mock)

    def reset_all(self):
        for binding in self.bindings():
            self.reset_one(binding.mock)
        with self._lock:
            self._bindings.clear()

    def verify_all_called(self):
        all_rules = [rule for binding in self.bindings() for rule in binding.rules]
        called = [rule for rule in all_rules if rule.called]
        uncalled = [rule for rule in all_rules if not rule.called]

        if not uncalled:
            log.debug("All %s rules were called", len(all_rules))
            return

        call_lines = "".join(
            "\n%s\n%s" % (indent(rule.source_location), indent(rule.describe(), "    "))
            for rule in uncalled
        )
        msg = "Failed verify_all_when_mocks_called: %s not called (called mocks: %s of %s): %s" % (
            len(uncalled), len(called), len(all_rules), call_lines
        )
        events.emit(events.VERIFY_FAILED, self, called=len(called), total=len(all_rules), uncalled=uncalled)
        raise VerificationError(
            msg,
            expected="called mocks: %s" % len(all_rules),
            actual="called mocks: %s" % len(called),
            uncalled=uncalled,
        )


_registry = Registry()
# only the process-wide registry sets the level, registries made in tests leave it alone
log.set_default_level(conf_get(_registry.config, Settings.LOG_LEVEL))


def registry() -> Registry:
    return _registry


def set_registry(new_registry: Registry) -> Registry:
    """Installs new_registry as the process-wide registry, returning the previous one."""
    global _registry
    previous, _registry = _registry, new_registry
    return previous


@contextmanager
def use_registry(new_registry: Registry = None):
    new_registry = new_registry if new_registry is not None else Registry()
    previous = set_registry(new_registry)
    try:
        yield new_registry
    finally:
        new_registry.reset_all()
        set_registry(previous)


def reset_all_when_mocks():
    registry().reset_all()


def verify_all_when_mocks_called():
    registry().verify_all_called()
