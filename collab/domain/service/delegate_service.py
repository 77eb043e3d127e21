"""Delegate access domain service."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

import logfire

from collab.domain.error import (
    AccessResolutionError,
    BusinessRuleViolationError,
    NotAuthorizedError,
    NotFoundError,
)
from collab.domain.model.delegate import Delegate
from collab.domain.repository import DelegateRepository
from collab.domain.value import (
    AccountType,
    DelegatedAccess,
    DelegateId,
    DelegateStatus,
    ProfileId,
    SessionIdentity,
    UserId,
)

from .base import Service


@dataclass
class LinkOutcome:
    """Per-invitation result of one linking pass.

    activated: records this pass bound to the user
    skipped: records another session activated first
    failed: records whose activation raised, retried on the next pass
    lookup_failed: the pending lookup raised, so no invitation was tried
    """

    activated: list[DelegateId] = field(default_factory=list)
    skipped: list[DelegateId] = field(default_factory=list)
    failed: list[DelegateId] = field(default_factory=list)
    lookup_failed: bool = False


class DelegateService(Service):
    """Domain service for invitation linking and delegated access."""

    def __init__(self, delegate_repository: DelegateRepository) -> None:
        """Initialize delegate service.

        Args:
            delegate_repository: Delegate repository
        """
        self.delegate_repository = delegate_repository

    async def link_pending_invitations(self, identity: SessionIdentity) -> LinkOutcome:
        """Activate every pending invitation addressed to the session's email.

        Best effort: each invitation is activated independently and failures
        are logged, never raised. A failed invitation stays pending and is
        picked up again on the next session start.

        Args:
            identity: Authenticated session identity

        Returns:
            Outcome of this pass
        """
        outcome = LinkOutcome()
        if identity.email is None or identity.user_id is None:
            logfire.debug(
                "Skipping invitation linking",
                has_email=identity.email is not None,
                has_user=identity.user_id is not None,
            )
            return outcome

        user_id = identity.user_id
        email = identity.email

        with logfire.span(
            "delegate_service.link_pending_invitations", user_id=str(user_id)
        ):
            try:
                pending = await self.delegate_repository.find_pending_by_email(email)
            except Exception as e:
                logfire.error(
                    "Pending invitation lookup failed",
                    user_id=str(user_id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                outcome.lookup_failed = True
                return outcome

            for invitation in pending:
                try:
                    changed = await self.delegate_repository.activate(
                        invitation.id, user_id, datetime.now(timezone.utc)
                    )
                except Exception as e:
                    logfire.warn(
                        "Invitation activation failed",
                        delegate_id=str(invitation.id),
                        user_id=str(user_id),
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    outcome.failed.append(invitation.id)
                    continue

                if changed:
                    outcome.activated.append(invitation.id)
                    logfire.info(
                        "Invitation activated",
                        delegate_id=str(invitation.id),
                        user_id=str(user_id),
                        profile_id=str(invitation.profile_id),
                        account_type=invitation.account_type.value,
                    )
                else:
                    outcome.skipped.append(invitation.id)

            logfire.info(
                "Invitation linking finished",
                user_id=str(user_id),
                pending=len(pending),
                activated=len(outcome.activated),
                skipped=len(outcome.skipped),
                failed=len(outcome.failed),
            )
            return outcome

    async def resolve_access(self, identity: SessionIdentity) -> list[DelegatedAccess]:
        """Compute the authorization set of a user.

        Duplicate active delegations for the same profile collapse to one
        entry, first seen first.

        Args:
            identity: Authenticated session identity

        Returns:
            Profiles the user may act on behalf of; empty when the session
            is unauthenticated

        Raises:
            AccessResolutionError: If the store could not be read
        """
        if identity.user_id is None:
            return []

        user_id = identity.user_id
        with logfire.span("delegate_service.resolve_access", user_id=str(user_id)):
            records = await self._active_delegations(user_id)

            access: list[DelegatedAccess] = []
            seen: set[DelegatedAccess] = set()
            for record in records:
                if record.delegate_user_id is None:
                    logfire.warn(
                        "Active delegation without bound user",
                        delegate_id=str(record.id),
                    )
                    continue
                entry = record.to_access()
                if entry in seen:
                    logfire.warn(
                        "Duplicate active delegation",
                        delegate_id=str(record.id),
                        user_id=str(user_id),
                        profile_id=str(record.profile_id),
                    )
                    continue
                seen.add(entry)
                access.append(entry)

            logfire.info(
                "Delegated access resolved", user_id=str(user_id), count=len(access)
            )
            return access

    async def find_delegated_profile(
        self, identity: SessionIdentity, account_type: AccountType
    ) -> ProfileId | None:
        """Find the first profile of a kind the user manages as a delegate.

        Args:
            identity: Authenticated session identity
            account_type: Kind of profile to look for

        Returns:
            Profile ID, or None if the user delegates for no such profile

        Raises:
            AccessResolutionError: If the store could not be read
        """
        for entry in await self.resolve_access(identity):
            if entry.account_type == account_type:
                return entry.profile_id
        return None

    async def has_access(
        self,
        identity: SessionIdentity,
        profile_id: ProfileId,
        account_type: AccountType,
    ) -> bool:
        """Check whether the user may act on behalf of a profile.

        Raises:
            AccessResolutionError: If the store could not be read
        """
        wanted = DelegatedAccess(profile_id=profile_id, account_type=account_type)
        return wanted in await self.resolve_access(identity)

    async def list_profile_delegates(
        self, profile_id: ProfileId, account_type: AccountType
    ) -> list[Delegate]:
        """List pending and active delegates of a profile.

        Args:
            profile_id: Delegated profile
            account_type: Kind of profile

        Returns:
            Delegate records, newest invitation first
        """
        with logfire.span(
            "delegate_service.list_profile_delegates",
            profile_id=str(profile_id),
            account_type=account_type.value,
        ):
            delegates = await self.delegate_repository.find_by_profile(
                profile_id, account_type
            )
            logfire.info(
                "Profile delegates listed",
                profile_id=str(profile_id),
                count=len(delegates),
            )
            return delegates

    async def revoke(self, delegate_id: DelegateId, owner_user_id: UserId) -> Delegate:
        """Revoke an active delegation.

        Args:
            delegate_id: Delegation to revoke
            owner_user_id: User requesting the revocation

        Returns:
            The revoked record

        Raises:
            NotFoundError: If the record does not exist
            NotAuthorizedError: If the requester did not issue the invitation
            BusinessRuleViolationError: If the record is not active
        """
        with logfire.span(
            "delegate_service.revoke",
            delegate_id=str(delegate_id),
            owner_user_id=str(owner_user_id),
        ):
            delegate = await self.delegate_repository.find_by_id(delegate_id)
            if delegate is None:
                raise NotFoundError("Delegate", str(delegate_id))
            if delegate.owner_user_id != owner_user_id:
                logfire.warn(
                    "Revocation by non-owner",
                    delegate_id=str(delegate_id),
                    owner_user_id=str(owner_user_id),
                )
                raise NotAuthorizedError("delegate", str(delegate_id), str(owner_user_id))

            changed = await self.delegate_repository.update_status(
                delegate_id, DelegateStatus.ACTIVE, DelegateStatus.REVOKED
            )
            if not changed:
                raise BusinessRuleViolationError(
                    f"Only active delegations can be revoked "
                    f"(delegate {delegate_id} is {delegate.status.value})"
                )

            logfire.info("Delegation revoked", delegate_id=str(delegate_id))
            return delegate.model_copy(update={"status": DelegateStatus.REVOKED})

    async def _active_delegations(self, user_id: UserId) -> list[Delegate]:
        try:
            return await self.delegate_repository.find_active_by_user(user_id)
        except Exception as e:
            logfire.error(
                "Active delegation lookup failed",
                user_id=str(user_id),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise AccessResolutionError(str(user_id), e) from e
