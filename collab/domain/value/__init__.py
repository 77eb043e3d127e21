"""Domain value objects for delegate access."""

from collab.domain.value.identifiers import DelegateId, ProfileId, UserId
from collab.domain.value.types import (
    AccountType,
    DelegatedAccess,
    DelegateEmail,
    DelegateStatus,
    SessionIdentity,
)

__all__ = [
    # Identifiers
    "UserId",
    "ProfileId",
    "DelegateId",
    # Types
    "AccountType",
    "DelegateStatus",
    "DelegateEmail",
    "SessionIdentity",
    "DelegatedAccess",
]
