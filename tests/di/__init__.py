"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .profiles import MockProfilesProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockProfilesProvider",
    "build_test_container",
]
