import pytest

from whenmock import Registry, use_registry


@pytest.fixture(autouse=True)
def isolated_registry():
    # Bindings live in process-wide state, so every test gets its own registry
    # which is reset (restoring every mock) when the test is done.
    with use_registry(Registry.create()) as registry:
        yield registry
