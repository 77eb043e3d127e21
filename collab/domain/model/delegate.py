"""Delegate entity.

A delegate record lets a secondary user act on behalf of a brand or creator
profile. It starts life as an email invitation and becomes an active
delegation the first time the invitee signs in.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from collab.domain.model.common import DomainModel
from collab.domain.value import (
    AccountType,
    DelegatedAccess,
    DelegateEmail,
    DelegateId,
    DelegateStatus,
    ProfileId,
    UserId,
)


class Delegate(DomainModel):
    """Delegate entity.

    Business rules:
    - Created pending, addressed to an email, with no bound user
    - Activated exactly once, binding delegate_user_id and accepted_at
    - delegate_user_id and accepted_at are set together or not at all
    - Revoked only from active; never returns to pending
    - Never physically deleted
    """

    id: DelegateId
    owner_user_id: UserId
    profile_id: ProfileId
    account_type: AccountType
    delegate_email: DelegateEmail
    delegate_user_id: Optional[UserId] = None
    status: DelegateStatus = DelegateStatus.PENDING
    invited_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    accepted_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == DelegateStatus.PENDING

    @property
    def is_active(self) -> bool:
        return self.status == DelegateStatus.ACTIVE

    def activated(self, user_id: UserId, accepted_at: datetime) -> "Delegate":
        """Return the active copy of this pending invitation."""
        return self.model_copy(
            update={
                "status": DelegateStatus.ACTIVE,
                "delegate_user_id": user_id,
                "accepted_at": accepted_at,
            }
        )

    def to_access(self) -> DelegatedAccess:
        return DelegatedAccess(
            profile_id=self.profile_id, account_type=self.account_type
        )
