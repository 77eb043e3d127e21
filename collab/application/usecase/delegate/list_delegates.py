"""List profile delegates use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from collab.domain.error import NotAuthorizedError
from collab.domain.service import DelegateService
from collab.domain.value import AccountType, DelegateStatus, ProfileId, UserId


class DelegateItem(BaseModel):
    """Delegate item in response."""

    delegate_id: str
    delegate_email: str
    status: DelegateStatus
    invited_at: datetime
    accepted_at: datetime | None = None


class ListDelegatesRequest(BaseModel):
    """List delegates request."""

    owner_user_id: str  # User ID from auth
    profile_id: UUID
    account_type: AccountType


class ListDelegatesResponse(BaseModel):
    """List delegates response."""

    delegates: list[DelegateItem]
    total: int


class ListDelegatesUseCase:
    """Use case for listing the team of a profile."""

    def __init__(self, delegate_service: DelegateService) -> None:
        """Initialize list delegates use case.

        Args:
            delegate_service: Delegate domain service
        """
        self.delegate_service = delegate_service

    async def execute(self, request: ListDelegatesRequest) -> ListDelegatesResponse:
        """Execute list delegates flow.

        Args:
            request: Profile whose delegates to list

        Returns:
            Pending and active delegates, newest invitation first

        Raises:
            NotAuthorizedError: If any listed record was issued by another user
        """
        owner_id = UserId(UUID(request.owner_user_id))
        delegates = await self.delegate_service.list_profile_delegates(
            ProfileId(request.profile_id), request.account_type
        )

        # Ownership lives with the profile tables; the records carry the issuer
        if any(d.owner_user_id != owner_id for d in delegates):
            raise NotAuthorizedError(
                "profile", str(request.profile_id), request.owner_user_id
            )

        items = [
            DelegateItem(
                delegate_id=str(d.id),
                delegate_email=d.delegate_email.root,
                status=d.status,
                invited_at=d.invited_at,
                accepted_at=d.accepted_at,
            )
            for d in delegates
        ]
        return ListDelegatesResponse(delegates=items, total=len(items))
