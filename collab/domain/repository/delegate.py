"""Delegate repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from collab.domain.model.delegate import Delegate
from collab.domain.value import (
    AccountType,
    DelegateEmail,
    DelegateId,
    DelegateStatus,
    ProfileId,
    UserId,
)


class DelegateRepository(ABC):
    """Repository for Delegate entity.

    Defines the contract for delegate persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, delegate_id: DelegateId) -> Delegate | None:
        """Find a delegate record by ID.

        Args:
            delegate_id: The record's unique identifier

        Returns:
            The delegate record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_email(self, email: DelegateEmail) -> list[Delegate]:
        """Find all pending invitations addressed to an email.

        Critical path for session start - must be fast.

        Args:
            email: Normalized delegate email

        Returns:
            Pending delegate records for this email
        """
        pass

    @abstractmethod
    async def activate(
        self, delegate_id: DelegateId, user_id: UserId, accepted_at: datetime
    ) -> bool:
        """Bind a pending invitation to a user.

        Conditional on the record still being pending, so concurrent
        activations of the same record converge on a single binding.

        Args:
            delegate_id: Invitation to activate
            user_id: User the delegation is bound to
            accepted_at: Activation timestamp

        Returns:
            True if this call activated the record, False if it was no
            longer pending (or does not exist)
        """
        pass

    @abstractmethod
    async def find_active_by_user(self, user_id: UserId) -> list[Delegate]:
        """Find all active delegations held by a user.

        Args:
            user_id: Delegate user ID

        Returns:
            Active delegate records bound to this user
        """
        pass

    @abstractmethod
    async def find_by_profile(
        self,
        profile_id: ProfileId,
        account_type: AccountType,
        statuses: tuple[DelegateStatus, ...] = (
            DelegateStatus.PENDING,
            DelegateStatus.ACTIVE,
        ),
    ) -> list[Delegate]:
        """Find delegate records of a profile, newest invitation first.

        Args:
            profile_id: Delegated profile
            account_type: Kind of profile
            statuses: Statuses to include

        Returns:
            Matching delegate records
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        delegate_id: DelegateId,
        expected: DelegateStatus,
        new_status: DelegateStatus,
    ) -> bool:
        """Move a record from one status to another.

        Args:
            delegate_id: Record to update
            expected: Status the record must currently have
            new_status: Status to set

        Returns:
            True if the record was updated, False otherwise
        """
        pass

    @abstractmethod
    async def save(self, delegate: Delegate) -> Delegate:
        """Save a delegate record (create or update).

        Invitations are issued elsewhere; this is used by seeding and
        tests.

        Args:
            delegate: The record to save

        Returns:
            The saved record
        """
        pass
