import pytest

from ifexpr.config import _reset_config


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test starts (and leaves) with no cached ifexpr.config."""
    _reset_config()
    yield
    _reset_config()
