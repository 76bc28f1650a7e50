"""Shared fixtures."""

import pytest

from resultkit.config import clear_settings_cache


@pytest.fixture(autouse=True)
def fresh_settings() -> object:
    """Reload settings from the (possibly monkeypatched) environment for each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
