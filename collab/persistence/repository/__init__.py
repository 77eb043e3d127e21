"""PostgreSQL repository implementations."""

from collab.persistence.repository.delegate import PostgresDelegateRepository

__all__ = [
    "PostgresDelegateRepository",
]
