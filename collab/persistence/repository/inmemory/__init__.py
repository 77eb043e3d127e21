"""In-memory repository implementations for testing."""

from .delegate import InMemoryDelegateRepository

__all__ = [
    "InMemoryDelegateRepository",
]
