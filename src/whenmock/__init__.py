from importlib import metadata as _metadata

from . import matchers
from .errors import (
    ConfigurationError,
    MatcherAssertionError,
    RejectedValue,
    VerificationError,
    WhenMockError,
)
from .evaluate import AllArgsPredicate, Predicate, all_args, predicate
from .fluent import CallMock, WhenMock, when
from .registry import (
    Registry,
    registry,
    reset_all_when_mocks,
    set_registry,
    use_registry,
    verify_all_when_mocks_called,
)


def _load_version() -> str:
    """Return the package version from installed metadata."""
    try:
        return _metadata.version("whenmock")
    except _metadata.PackageNotFoundError:
        return "0.0.0"


__version__ = _load_version()

__all__ = [
    "AllArgsPredicate",
    "CallMock",
    "ConfigurationError",
    "MatcherAssertionError",
    "Predicate",
    "Registry",
    "RejectedValue",
    "VerificationError",
    "WhenMock",
    "WhenMockError",
    "all_args",
    "matchers",
    "predicate",
    "registry",
    "reset_all_when_mocks",
    "set_registry",
    "use_registry",
    "verify_all_when_mocks_called",
    "when",
]
