"""Strongly typed identifiers for delegate access entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ProfileId = NewType("ProfileId", UUID)
DelegateId = NewType("DelegateId", UUID)
