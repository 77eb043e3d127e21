"""Domain model entities."""

from collab.domain.model.delegate import Delegate

__all__ = [
    "Delegate",
]
