"""
Pytest configuration for Traffic AQI System tests.

Registers custom markers and provides shared fixtures.
"""

from datetime import datetime

import pytest

from trafficaqi.city_catalog import build_default_catalog


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


class MidpointRNG:
    """Stand-in for numpy's Generator whose uniform() always returns the midpoint (no jitter)."""

    def uniform(self, low, high):
        return (low + high) / 2


def fixed_clock(hour: int):
    """Returns a clock callable frozen at the given hour of 2026-10-19."""
    return lambda: datetime(2026, 10, 19, hour, 30)


@pytest.fixture
def catalog():
    """Fixture providing the default ten-city catalog."""
    return build_default_catalog()


@pytest.fixture
def midpoint_rng():
    """Fixture providing a jitter-free random source."""
    return MidpointRNG()


@pytest.fixture
def clock_at():
    """Fixture providing a factory of clocks frozen at a given hour."""
    return fixed_clock
