"""Mock providers for testing."""

from .firebase import MockFirebaseProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockFirebaseProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
