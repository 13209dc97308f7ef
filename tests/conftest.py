"""Test configuration and fixtures."""

import pytest

from tests.harness import ServiceHarness


@pytest.fixture
def harness() -> ServiceHarness:
    """Fresh in-memory invitation service harness with a fixed clock."""
    return ServiceHarness()
