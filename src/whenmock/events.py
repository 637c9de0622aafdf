from __future__ import annotations

import time
from contextlib import contextmanager

from blinker import Namespace

BINDING_CREATED = "binding.created"
RULE_DECLARED = "rule.declared"
RULE_MATCHED = "rule.matched"
BINDING_RESET = "binding.reset"
VERIFY_FAILED = "verify.failed"

_ns = Namespace()


def now_ms() -> int:
    return int(time.time() * 1000)


def signal(name: str):
    return _ns.signal(name)


def emit(name: str, sender: object | None = None, **payload):
    payload.setdefault("ts", now_ms())
    return signal(name).send(sender, event=name, **payload)


@contextmanager
def subscribed(name: str, receiver):
    """Connects receiver to the named signal for the duration of the block."""
    sig = signal(name)
    sig.connect(receiver)
    try:
        yield receiver
    finally:
        sig.disconnect(receiver)
