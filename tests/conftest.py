import pytest

from gravity4.debug import debug, DebugLevel


@pytest.fixture(autouse=True)
def quiet_logging():
    debug.configure(level=DebugLevel.WARNING)
    yield
    debug.configure(level=DebugLevel.INFO)
