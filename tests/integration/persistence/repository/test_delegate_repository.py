"""Integration tests for DelegateRepository.

These tests run against PostgreSQL and verify the conditional updates
that keep concurrent sessions from double-binding an invitation.
"""

import asyncio
import os
from datetime import datetime, timezone
from uuid import uuid4

import pytest
from sqlalchemy import text

from collab.adapter.error import StoreUnavailableError
from collab.config import Settings
from collab.domain.repository import DelegateRepository
from collab.domain.value import DelegateEmail, DelegateStatus, UserId
from collab.persistence.database import create_engine, create_session_factory
from collab.persistence.repository import PostgresDelegateRepository
from tests.factories import make_active, make_invitation
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="requires DATABASE__URL"
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def _unique_email() -> str:
    return f"delegate-{uuid4().hex[:12]}@example.com"


class TestDelegateRepositoryIntegration:
    """Integration tests for PostgresDelegateRepository."""

    @pytest.mark.asyncio
    async def test_pending_lookup_uses_normalized_email(self, integration_env):
        """Invitations are found whatever case the lookup email has."""
        # Arrange
        repo = await integration_env.get(DelegateRepository)
        email = _unique_email()
        invitation = await repo.save(make_invitation(email.upper()))

        # Act
        found = await repo.find_pending_by_email(DelegateEmail(email))

        # Assert
        assert [d.id for d in found] == [invitation.id]

    @pytest.mark.asyncio
    async def test_activate_is_conditional(self, integration_env):
        """A second activation finds nothing to change."""
        # Arrange
        repo = await integration_env.get(DelegateRepository)
        invitation = await repo.save(make_invitation(_unique_email()))
        first_user = UserId(uuid4())
        now = datetime.now(timezone.utc)

        # Act
        first = await repo.activate(invitation.id, first_user, now)
        second = await repo.activate(invitation.id, UserId(uuid4()), now)

        # Assert
        assert first is True
        assert second is False
        stored = await repo.find_by_id(invitation.id)
        assert stored.status == DelegateStatus.ACTIVE
        assert stored.delegate_user_id == first_user

    @pytest.mark.asyncio
    async def test_update_status(self, integration_env):
        """Status changes only from the expected status."""
        # Arrange
        repo = await integration_env.get(DelegateRepository)
        delegate = await repo.save(make_active(UserId(uuid4()), email=_unique_email()))

        # Act
        revoked = await repo.update_status(
            delegate.id, DelegateStatus.ACTIVE, DelegateStatus.REVOKED
        )
        again = await repo.update_status(
            delegate.id, DelegateStatus.ACTIVE, DelegateStatus.REVOKED
        )

        # Assert
        assert revoked is True
        assert again is False
        assert await repo.find_active_by_user(delegate.delegate_user_id) == []

    @pytest.mark.asyncio
    async def test_concurrent_sessions_bind_once(self):
        """Two sessions racing on one invitation produce a single binding."""
        # Arrange
        settings = Settings()
        engine = create_engine(settings)
        session_factory = create_session_factory(engine)
        email = _unique_email()

        async with session_factory() as session:
            invitation = await PostgresDelegateRepository(session).save(
                make_invitation(email)
            )
            await session.commit()

        async def _link(user_id: UserId) -> bool:
            async with session_factory() as session:
                repo = PostgresDelegateRepository(session)
                changed = await repo.activate(
                    invitation.id, user_id, datetime.now(timezone.utc)
                )
                await session.commit()
                return changed

        # Act
        results = await asyncio.gather(_link(UserId(uuid4())), _link(UserId(uuid4())))

        # Assert
        assert sorted(results) == [False, True]
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_failed_pending_lookup_keeps_session_usable(self):
        """A lookup that times out does not abort the request's transaction."""
        # Arrange
        settings = Settings()
        engine = create_engine(settings)
        session_factory = create_session_factory(engine)
        user_id = UserId(uuid4())

        async with session_factory() as session:
            await PostgresDelegateRepository(session).save(
                make_active(user_id, email=_unique_email())
            )
            await session.commit()

        async with session_factory() as locker, session_factory() as session:
            await locker.execute(
                text("LOCK TABLE account_delegates IN ACCESS EXCLUSIVE MODE")
            )
            repo = PostgresDelegateRepository(session)
            await session.execute(text("SET LOCAL lock_timeout = '100ms'"))

            # Act
            with pytest.raises(StoreUnavailableError):
                await repo.find_pending_by_email(DelegateEmail(_unique_email()))
            await locker.rollback()
            active = await repo.find_active_by_user(user_id)

            # Assert
            assert [d.delegate_user_id for d in active] == [user_id]
            await session.rollback()

        await engine.dispose()
