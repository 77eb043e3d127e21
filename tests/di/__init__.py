"""Mock providers for testing."""

from .persistence import (
    FailingDelegateRepository,
    InterleavingDelegateRepository,
    MockPersistenceProvider,
)
from .container import build_test_container

__all__ = [
    "FailingDelegateRepository",
    "InterleavingDelegateRepository",
    "MockPersistenceProvider",
    "build_test_container",
]
