"""Unit tests for DelegateService."""

import asyncio
from uuid import uuid4

import pytest

from collab.domain.error import (
    AccessResolutionError,
    BusinessRuleViolationError,
    NotAuthorizedError,
    NotFoundError,
)
from collab.domain.repository import DelegateRepository
from collab.domain.service import DelegateService
from collab.domain.value import (
    AccountType,
    DelegatedAccess,
    DelegateId,
    DelegateStatus,
    ProfileId,
    SessionIdentity,
    UserId,
)
from tests.factories import make_active, make_identity, make_invitation
from tests.di import FailingDelegateRepository, InterleavingDelegateRepository
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()
flaky_env = create_env_fixture(delegate_repository_factory=FailingDelegateRepository)
racy_env = create_env_fixture(
    delegate_repository_factory=InterleavingDelegateRepository
)


class TestLinkPendingInvitations:
    """Tests for link_pending_invitations method."""

    @pytest.mark.asyncio
    async def test_activates_pending_invitation(self, unit_env):
        """A pending invitation for the session email becomes active."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        invitation = await repo.save(make_invitation("jane@example.com"))
        identity = make_identity("jane@example.com")

        # Act
        outcome = await service.link_pending_invitations(identity)

        # Assert
        assert outcome.activated == [invitation.id]
        stored = await repo.find_by_id(invitation.id)
        assert stored.status == DelegateStatus.ACTIVE
        assert stored.delegate_user_id == identity.user_id
        assert stored.accepted_at is not None

    @pytest.mark.asyncio
    async def test_matches_email_case_insensitively(self, unit_env):
        """An invitation to Jane@Example.com is activated by jane@example.com."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        invitation = await repo.save(make_invitation("Jane@Example.com"))

        # Act
        outcome = await service.link_pending_invitations(
            make_identity("jane@example.com")
        )

        # Assert
        assert outcome.activated == [invitation.id]

    @pytest.mark.asyncio
    async def test_session_email_case_is_ignored(self, unit_env):
        """A login email in mixed case still matches."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        invitation = await repo.save(make_invitation("jane@example.com"))

        # Act
        outcome = await service.link_pending_invitations(
            make_identity("  JANE@example.COM ")
        )

        # Assert
        assert outcome.activated == [invitation.id]

    @pytest.mark.asyncio
    async def test_no_email_performs_no_writes(self, flaky_env):
        """Without an email there is nothing to match and nothing is written."""
        # Arrange
        service = await flaky_env.get(DelegateService)
        repo = await flaky_env.get(DelegateRepository)
        await repo.save(make_invitation("jane@example.com"))

        # Act
        outcome = await service.link_pending_invitations(make_identity(email=None))

        # Assert
        assert outcome.activated == []
        assert repo.activation_calls == []

    @pytest.mark.asyncio
    async def test_no_user_performs_no_writes(self, flaky_env):
        """An identity without a user id has nothing to bind to."""
        # Arrange
        service = await flaky_env.get(DelegateService)
        repo = await flaky_env.get(DelegateRepository)
        await repo.save(make_invitation("jane@example.com"))

        # Act
        await service.link_pending_invitations(
            SessionIdentity(user_id=None, email="jane@example.com")
        )

        # Assert
        assert repo.activation_calls == []

    @pytest.mark.asyncio
    async def test_second_run_activates_nothing(self, flaky_env):
        """Linking twice yields the same state as linking once."""
        # Arrange
        service = await flaky_env.get(DelegateService)
        repo = await flaky_env.get(DelegateRepository)
        first = await repo.save(make_invitation("jane@example.com"))
        second = await repo.save(make_invitation("jane@example.com"))
        identity = make_identity("jane@example.com")

        # Act
        first_outcome = await service.link_pending_invitations(identity)
        access_after_first = await service.resolve_access(identity)
        second_outcome = await service.link_pending_invitations(identity)

        # Assert
        assert set(first_outcome.activated) == {first.id, second.id}
        assert second_outcome.activated == []
        assert len(repo.activation_calls) == 2
        assert await service.resolve_access(identity) == access_after_first

    @pytest.mark.asyncio
    async def test_ignores_other_emails(self, unit_env):
        """Invitations for other addresses stay pending."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        other = await repo.save(make_invitation("someone.else@example.com"))

        # Act
        outcome = await service.link_pending_invitations(
            make_identity("jane@example.com")
        )

        # Assert
        assert outcome.activated == []
        assert (await repo.find_by_id(other.id)).status == DelegateStatus.PENDING

    @pytest.mark.asyncio
    async def test_failed_activation_does_not_stop_the_batch(self, flaky_env):
        """One failing invitation leaves the others activated."""
        # Arrange
        service = await flaky_env.get(DelegateService)
        repo = await flaky_env.get(DelegateRepository)
        first = await repo.save(make_invitation("jane@example.com", invited_minutes_ago=5))
        second = await repo.save(make_invitation("jane@example.com"))
        repo.fail_activation_for.add(second.id)
        identity = make_identity("jane@example.com")

        # Act
        outcome = await service.link_pending_invitations(identity)

        # Assert
        assert outcome.activated == [first.id]
        assert outcome.failed == [second.id]
        assert (await repo.find_by_id(second.id)).status == DelegateStatus.PENDING
        assert await service.resolve_access(identity) == [first.to_access()]

    @pytest.mark.asyncio
    async def test_failed_invitation_is_retried_next_session(self, flaky_env):
        """A failed activation stays pending and succeeds on a later pass."""
        # Arrange
        service = await flaky_env.get(DelegateService)
        repo = await flaky_env.get(DelegateRepository)
        invitation = await repo.save(make_invitation("jane@example.com"))
        repo.fail_activation_for.add(invitation.id)
        identity = make_identity("jane@example.com")
        await service.link_pending_invitations(identity)

        # Act
        repo.fail_activation_for.clear()
        outcome = await service.link_pending_invitations(identity)

        # Assert
        assert outcome.activated == [invitation.id]

    @pytest.mark.asyncio
    async def test_lookup_failure_is_swallowed(self, flaky_env):
        """A failing pending lookup is reported in the outcome, not raised."""
        # Arrange
        service = await flaky_env.get(DelegateService)
        repo = await flaky_env.get(DelegateRepository)
        repo.fail_pending_lookup = True

        # Act
        outcome = await service.link_pending_invitations(
            make_identity("jane@example.com")
        )

        # Assert
        assert outcome.lookup_failed is True
        assert outcome.activated == []


class TestConcurrentLinking:
    """Concurrent sessions racing to activate the same invitation."""

    @pytest.mark.asyncio
    async def test_same_user_two_sessions_converge(self, racy_env):
        """Two sessions of one user activate the invitation exactly once."""
        # Arrange
        service = await racy_env.get(DelegateService)
        repo = await racy_env.get(DelegateRepository)
        invitation = await repo.save(make_invitation("jane@example.com"))
        identity = make_identity("jane@example.com")

        # Act
        outcomes = await asyncio.gather(
            service.link_pending_invitations(identity),
            service.link_pending_invitations(identity),
        )

        # Assert
        assert sum(len(o.activated) for o in outcomes) == 1
        assert sum(len(o.skipped) for o in outcomes) == 1
        stored = await repo.find_by_id(invitation.id)
        assert stored.status == DelegateStatus.ACTIVE
        assert stored.delegate_user_id == identity.user_id
        assert stored.accepted_at is not None

    @pytest.mark.asyncio
    async def test_different_users_never_double_bind(self, racy_env):
        """Only one of two racing users ends up bound to the invitation."""
        # Arrange
        service = await racy_env.get(DelegateService)
        repo = await racy_env.get(DelegateRepository)
        invitation = await repo.save(make_invitation("shared@example.com"))
        first = make_identity("shared@example.com")
        second = make_identity("shared@example.com")

        # Act
        await asyncio.gather(
            service.link_pending_invitations(first),
            service.link_pending_invitations(second),
        )

        # Assert
        stored = await repo.find_by_id(invitation.id)
        assert stored.status == DelegateStatus.ACTIVE
        assert stored.delegate_user_id in {first.user_id, second.user_id}
        winners = [
            i for i in (first, second) if await service.resolve_access(i)
        ]
        assert len(winners) == 1


class TestResolveAccess:
    """Tests for resolve_access method."""

    @pytest.mark.asyncio
    async def test_unauthenticated_is_empty(self, unit_env):
        """No user id resolves to no access without error."""
        service = await unit_env.get(DelegateService)

        result = await service.resolve_access(SessionIdentity())

        assert result == []

    @pytest.mark.asyncio
    async def test_no_delegations_is_empty(self, unit_env):
        """A user without delegations gets an empty set."""
        service = await unit_env.get(DelegateService)

        result = await service.resolve_access(make_identity())

        assert result == []

    @pytest.mark.asyncio
    async def test_returns_active_delegations_only(self, unit_env):
        """Pending and revoked records are not part of the authorization set."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        identity = make_identity("jane@example.com")
        brand = await repo.save(make_active(identity.user_id))
        creator = await repo.save(
            make_active(identity.user_id, account_type=AccountType.CREATOR)
        )
        revoked = await repo.save(make_active(identity.user_id))
        await repo.update_status(
            revoked.id, DelegateStatus.ACTIVE, DelegateStatus.REVOKED
        )
        await repo.save(make_invitation("jane@example.com"))

        # Act
        result = await service.resolve_access(identity)

        # Assert
        assert set(result) == {brand.to_access(), creator.to_access()}

    @pytest.mark.asyncio
    async def test_duplicate_delegations_collapse(self, unit_env):
        """Two active records for one profile yield one entry."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        identity = make_identity()
        profile_id = ProfileId(uuid4())
        await repo.save(make_active(identity.user_id, profile_id=profile_id))
        await repo.save(make_active(identity.user_id, profile_id=profile_id))

        # Act
        result = await service.resolve_access(identity)

        # Assert
        assert result == [
            DelegatedAccess(profile_id=profile_id, account_type=AccountType.BRAND)
        ]

    @pytest.mark.asyncio
    async def test_active_record_without_user_is_skipped(self, flaky_env):
        """An active row with no bound user is left out of the set."""
        # Arrange
        service = await flaky_env.get(DelegateService)
        repo = await flaky_env.get(DelegateRepository)
        identity = make_identity()
        bound = await repo.save(make_active(identity.user_id))
        repo.inconsistent_active.append(
            make_invitation("stray@example.com").model_copy(
                update={"status": DelegateStatus.ACTIVE}
            )
        )

        # Act
        result = await service.resolve_access(identity)

        # Assert
        assert result == [bound.to_access()]

    @pytest.mark.asyncio
    async def test_store_failure_is_distinct_from_empty(self, flaky_env):
        """A failing store raises instead of returning an empty set."""
        # Arrange
        service = await flaky_env.get(DelegateService)
        repo = await flaky_env.get(DelegateRepository)
        repo.fail_active_lookup = True

        # Act & Assert
        with pytest.raises(AccessResolutionError):
            await service.resolve_access(make_identity())

    @pytest.mark.asyncio
    async def test_link_then_resolve_sees_new_delegation(self, unit_env):
        """Resolution right after linking includes the new delegation."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        invitation = await repo.save(
            make_invitation("jane@example.com", account_type=AccountType.CREATOR)
        )
        identity = make_identity("jane@example.com")

        # Act
        await service.link_pending_invitations(identity)
        result = await service.resolve_access(identity)

        # Assert
        assert result == [
            DelegatedAccess(
                profile_id=invitation.profile_id, account_type=AccountType.CREATOR
            )
        ]


class TestAccessChecks:
    """Tests for find_delegated_profile and has_access."""

    @pytest.mark.asyncio
    async def test_find_delegated_profile_by_type(self, unit_env):
        """Returns the delegated profile of the requested kind."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        identity = make_identity()
        creator = await repo.save(
            make_active(identity.user_id, account_type=AccountType.CREATOR)
        )

        # Act & Assert
        assert (
            await service.find_delegated_profile(identity, AccountType.CREATOR)
            == creator.profile_id
        )
        assert await service.find_delegated_profile(identity, AccountType.BRAND) is None

    @pytest.mark.asyncio
    async def test_has_access_requires_matching_type(self, unit_env):
        """Access to a brand profile is not access to a creator profile."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        identity = make_identity()
        brand = await repo.save(make_active(identity.user_id))

        # Act & Assert
        assert await service.has_access(identity, brand.profile_id, AccountType.BRAND)
        assert not await service.has_access(
            identity, brand.profile_id, AccountType.CREATOR
        )
        assert not await service.has_access(
            identity, ProfileId(uuid4()), AccountType.BRAND
        )

    @pytest.mark.asyncio
    async def test_has_access_fails_closed(self, flaky_env):
        """Store failures propagate rather than answering False."""
        # Arrange
        service = await flaky_env.get(DelegateService)
        repo = await flaky_env.get(DelegateRepository)
        repo.fail_active_lookup = True

        # Act & Assert
        with pytest.raises(AccessResolutionError):
            await service.has_access(make_identity(), ProfileId(uuid4()), AccountType.BRAND)


class TestRevoke:
    """Tests for revoke method."""

    @pytest.mark.asyncio
    async def test_revoke_active_delegation(self, unit_env):
        """Owner revocation removes the delegation from the user's access."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        owner_id = UserId(uuid4())
        identity = make_identity()
        delegate = await repo.save(make_active(identity.user_id, owner_user_id=owner_id))

        # Act
        result = await service.revoke(delegate.id, owner_id)

        # Assert
        assert result.status == DelegateStatus.REVOKED
        assert (await repo.find_by_id(delegate.id)).status == DelegateStatus.REVOKED
        assert await service.resolve_access(identity) == []

    @pytest.mark.asyncio
    async def test_revoke_pending_is_rejected(self, unit_env):
        """Revocation is only reachable from active."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        owner_id = UserId(uuid4())
        invitation = await repo.save(
            make_invitation("jane@example.com", owner_user_id=owner_id)
        )

        # Act & Assert
        with pytest.raises(BusinessRuleViolationError):
            await service.revoke(invitation.id, owner_id)
        assert (await repo.find_by_id(invitation.id)).status == DelegateStatus.PENDING

    @pytest.mark.asyncio
    async def test_revoke_by_other_user_is_rejected(self, unit_env):
        """Only the issuing owner may revoke."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        delegate = await repo.save(make_active(UserId(uuid4())))

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await service.revoke(delegate.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_revoke_unknown_raises_not_found(self, unit_env):
        """Unknown delegate IDs raise NotFoundError."""
        service = await unit_env.get(DelegateService)

        with pytest.raises(NotFoundError):
            await service.revoke(DelegateId(uuid4()), UserId(uuid4()))


class TestListProfileDelegates:
    """Tests for list_profile_delegates method."""

    @pytest.mark.asyncio
    async def test_lists_pending_and_active_newest_first(self, unit_env):
        """Revoked records are hidden and newer invitations come first."""
        # Arrange
        service = await unit_env.get(DelegateService)
        repo = await unit_env.get(DelegateRepository)
        profile_id = ProfileId(uuid4())
        older = await repo.save(
            make_invitation("a@example.com", profile_id=profile_id, invited_minutes_ago=10)
        )
        newer = await repo.save(make_invitation("b@example.com", profile_id=profile_id))
        revoked = await repo.save(make_active(UserId(uuid4()), profile_id=profile_id))
        await repo.update_status(
            revoked.id, DelegateStatus.ACTIVE, DelegateStatus.REVOKED
        )
        await repo.save(
            make_invitation(
                "c@example.com", account_type=AccountType.CREATOR, profile_id=profile_id
            )
        )

        # Act
        result = await service.list_profile_delegates(profile_id, AccountType.BRAND)

        # Assert
        assert [d.id for d in result] == [newer.id, older.id]
