"""PostgreSQL implementation of Delegate repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from collab.adapter.error import StoreUnavailableError
from collab.domain.model import Delegate
from collab.domain.repository import DelegateRepository
from collab.domain.value import (
    AccountType,
    DelegateEmail,
    DelegateId,
    DelegateStatus,
    ProfileId,
    UserId,
)
from collab.persistence.mappers import delegate_to_dict, row_to_delegate
from collab.persistence.tables import account_delegates_table

t = account_delegates_table


class PostgresDelegateRepository(DelegateRepository):
    """PostgreSQL implementation of DelegateRepository.

    Driver and connection failures surface as StoreUnavailableError.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, delegate_id: DelegateId) -> Optional[Delegate]:
        """Find a delegate record by ID."""
        stmt = select(t).where(t.c.id == delegate_id)
        rows = await self._fetch(stmt)
        return rows[0] if rows else None

    async def find_pending_by_email(self, email: DelegateEmail) -> list[Delegate]:
        """Find pending invitations for an email.

        Indexed on (delegate_email, status). Runs in a savepoint so a failed
        lookup leaves the session usable for access resolution.
        """
        stmt = (
            select(t)
            .where(
                and_(
                    t.c.delegate_email == email.root,
                    t.c.status == DelegateStatus.PENDING.value,
                )
            )
            .order_by(t.c.invited_at)
        )
        return await self._fetch(stmt, savepoint=True)

    async def activate(
        self, delegate_id: DelegateId, user_id: UserId, accepted_at: datetime
    ) -> bool:
        """Activate a pending invitation.

        A single conditional UPDATE; a concurrent session that already
        activated the row leaves nothing to match. Runs in a savepoint so a
        failure does not poison the surrounding transaction.
        """
        stmt = (
            update(t)
            .where(
                and_(
                    t.c.id == delegate_id,
                    t.c.status == DelegateStatus.PENDING.value,
                )
            )
            .values(
                status=DelegateStatus.ACTIVE.value,
                delegate_user_id=user_id,
                accepted_at=accepted_at,
            )
            .returning(t.c.id)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.first()
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Could not activate {delegate_id}") from e
        return row is not None

    async def find_active_by_user(self, user_id: UserId) -> list[Delegate]:
        """Find active delegations bound to a user.

        Indexed on (delegate_user_id, status).
        """
        stmt = (
            select(t)
            .where(
                and_(
                    t.c.delegate_user_id == user_id,
                    t.c.status == DelegateStatus.ACTIVE.value,
                )
            )
            .order_by(t.c.accepted_at)
        )
        return await self._fetch(stmt)

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
        stmt = (
            select(t)
            .where(
                and_(
                    t.c.profile_id == profile_id,
                    t.c.account_type == account_type.value,
                    t.c.status.in_([s.value for s in statuses]),
                )
            )
            .order_by(t.c.invited_at.desc())
        )
        return await self._fetch(stmt)

    async def update_status(
        self,
        delegate_id: DelegateId,
        expected: DelegateStatus,
        new_status: DelegateStatus,
    ) -> bool:
        """Move a record between statuses if it still has the expected one."""
        stmt = (
            update(t)
            .where(and_(t.c.id == delegate_id, t.c.status == expected.value))
            .values(status=new_status.value)
            .returning(t.c.id)
        )
        try:
            result = await self.session.execute(stmt)
            row = result.first()
            await self.session.flush()
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Could not update {delegate_id}") from e
        return row is not None

    async def save(self, delegate: Delegate) -> Delegate:
        """Save a delegate record (create or update)."""
        values = delegate_to_dict(delegate)
        existing = await self.find_by_id(delegate.id)

        try:
            if existing:
                stmt = update(t).where(t.c.id == delegate.id).values(**values)
            else:
                stmt = insert(t).values(**values)
            await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Could not save {delegate.id}") from e
        return delegate

    async def _fetch(self, stmt, savepoint: bool = False) -> list[Delegate]:
        try:
            if savepoint:
                async with self.session.begin_nested():
                    result = await self.session.execute(stmt)
                    rows = result.mappings().all()
            else:
                result = await self.session.execute(stmt)
                rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Delegate query failed") from e
        return [row_to_delegate(dict(row)) for row in rows]
