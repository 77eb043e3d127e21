"""Repository interfaces for the delegate access domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from collab.domain.repository.delegate import DelegateRepository

__all__ = [
    "DelegateRepository",
]
