"""Shared fixtures for reservation core tests."""

import pytest
from fakes import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock at 2025-11-10T14:00:00Z."""
    return FakeClock()
