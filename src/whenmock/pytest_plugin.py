"""pytest fixtures, registered through the pytest11 entry point."""
import pytest

from .fluent import when as _when
from .registry import Registry, reset_all_when_mocks, use_registry


@pytest.fixture
def when():
    """The when() entry point, with every binding reset once the test is done."""
    yield _when
    reset_all_when_mocks()


@pytest.fixture
def when_registry():
    # a fresh registry installed as the process-wide one for this test only
    with use_registry(Registry()) as registry:
        yield registry
