"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from spot_scheduler.config import SchedulerSettings  # noqa: E402
from spot_scheduler.core.clock import FixedClock  # noqa: E402
from spot_scheduler.core.models import SpotRecord  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Service + repository tests")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now():
    """A fixed weekday mid-morning instant (outside the sleep gate)."""
    return datetime(2025, 3, 10, 10, 0, 0)


@pytest.fixture
def clock(now):
    return FixedClock(now)


@pytest.fixture
def settings():
    """Settings built from defaults only, independent of the environment."""
    return SchedulerSettings(_env_file=None)


@pytest.fixture
def make_spot():
    """Factory for spot records with sensible defaults."""

    def _make(spot_id: str = "spot-1", **overrides) -> SpotRecord:
        fields = {"id": spot_id, "piece_id": "piece-1"}
        fields.update(overrides)
        return SpotRecord(**fields)

    return _make
