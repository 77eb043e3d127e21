"""In-memory delegate repository for testing."""

from datetime import datetime
from typing import Optional

from collab.domain.model.delegate import Delegate
from collab.domain.repository.delegate import DelegateRepository
from collab.domain.value import (
    AccountType,
    DelegateEmail,
    DelegateId,
    DelegateStatus,
    ProfileId,
    UserId,
)


class InMemoryDelegateRepository(DelegateRepository):
    """In-memory implementation of DelegateRepository for testing.

    Conditional updates check and write without awaiting in between, so
    they are atomic with respect to other coroutines on the event loop.
    """

    def __init__(self) -> None:
        self._delegates: dict[DelegateId, Delegate] = {}

    async def find_by_id(self, delegate_id: DelegateId) -> Optional[Delegate]:
        """Find a delegate record by ID."""
        return self._delegates.get(delegate_id)

    async def find_pending_by_email(self, email: DelegateEmail) -> list[Delegate]:
        """Find pending invitations for an email."""
        matches = [
            d
            for d in self._delegates.values()
            if d.delegate_email == email and d.status == DelegateStatus.PENDING
        ]
        matches.sort(key=lambda d: d.invited_at)
        return matches

    async def activate(
        self, delegate_id: DelegateId, user_id: UserId, accepted_at: datetime
    ) -> bool:
        """Activate a pending invitation."""
        delegate = self._delegates.get(delegate_id)
        if delegate is None or delegate.status != DelegateStatus.PENDING:
            return False
        self._delegates[delegate_id] = delegate.activated(user_id, accepted_at)
        return True

    async def find_active_by_user(self, user_id: UserId) -> list[Delegate]:
        """Find active delegations bound to a user."""
        return [
            d
            for d in self._delegates.values()
            if d.delegate_user_id == user_id and d.status == DelegateStatus.ACTIVE
        ]

    async def find_by_profile(
        self,
        profile_id: ProfileId,
        account_type: AccountType,
        statuses: tuple[DelegateStatus, ...] = (
            DelegateStatus.PENDING,
            DelegateStatus.ACTIVE,
        ),
    ) -> list[Delegate]:
        """Find delegate records of a profile, newest invitation first."""
        matches = [
            d
            for d in self._delegates.values()
            if d.profile_id == profile_id
            and d.account_type == account_type
            and d.status in statuses
        ]
        matches.sort(key=lambda d: d.invited_at, reverse=True)
        return matches

    async def update_status(
        self,
        delegate_id: DelegateId,
        expected: DelegateStatus,
        new_status: DelegateStatus,
    ) -> bool:
        """Move a record between statuses if it still has the expected one."""
        delegate = self._delegates.get(delegate_id)
        if delegate is None or delegate.status != expected:
            return False
        self._delegates[delegate_id] = delegate.model_copy(
            update={"status": new_status}
        )
        return True

    async def save(self, delegate: Delegate) -> Delegate:
        """Save a delegate record (create or update)."""
        self._delegates[delegate.id] = delegate
        return delegate
