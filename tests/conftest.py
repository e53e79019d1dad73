"""Root conftest: shared test configuration."""

import os

import pytest

from fieldscript.config import get_settings

# Ensure a developer's environment doesn't change engine behaviour under test
for _key in ("FIELDSCRIPT_STRICT_VALUE_LOCK", "FIELDSCRIPT_LOG_FORMAT", "FIELDSCRIPT_LOG_LEVEL"):
    os.environ.pop(_key, None)


@pytest.fixture(autouse=True)
def fresh_settings():
    """get_settings() is lru_cached; every test starts from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
