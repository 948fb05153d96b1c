import pytest

from config.settings import reset_settings
from trip_store import get_store, reset_store


@pytest.fixture(autouse=True)
def fresh_state():
    """Every test starts with an empty trip store and default settings."""
    reset_store()
    reset_settings()
    yield
    reset_store()
    reset_settings()


@pytest.fixture
def trip():
    return get_store().create_trip("Jeju")
