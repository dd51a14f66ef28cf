"""Root conftest — shared test configuration."""

import pytest

from featurekit.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Every test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
