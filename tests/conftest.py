"""
PyTest Configuration and Fixtures for Catalog Search Tests

Provides:
- Settings with zero backoff delay
- In-memory catalog store (no database required)
- Orchestrator wired to the fake store
"""

import pytest

from catalog_search.config import Settings
from catalog_search.services.orchestrator import SearchOrchestrator
from tests.factories import FakeCatalogStore


@pytest.fixture
def test_settings():
    """Default settings with instant retries."""
    return Settings(retry_max_retries=2, retry_base_delay=0.0)


@pytest.fixture
def sleeps():
    """Records backoff delays instead of sleeping."""
    return []


@pytest.fixture
def fake_store():
    return FakeCatalogStore()


@pytest.fixture
def make_orchestrator(test_settings, sleeps):
    """Build an orchestrator around a given store."""
    def _make(store):
        return SearchOrchestrator(store, test_settings, sleep=sleeps.append)
    return _make
