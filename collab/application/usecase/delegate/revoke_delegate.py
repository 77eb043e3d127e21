"""Revoke delegate use case."""

from uuid import UUID

from pydantic import BaseModel

from collab.domain.service import DelegateService
from collab.domain.value import DelegateId, DelegateStatus, UserId


class RevokeDelegateRequest(BaseModel):
    """Revoke delegate request."""

    owner_user_id: str  # User ID from auth
    delegate_id: UUID


class RevokeDelegateResponse(BaseModel):
    """Revoke delegate response."""

    delegate_id: str
    status: DelegateStatus


class RevokeDelegateUseCase:
    """Use case for revoking a team member's access."""

    def __init__(self, delegate_service: DelegateService) -> None:
        self.delegate_service = delegate_service

    async def execute(self, request: RevokeDelegateRequest) -> RevokeDelegateResponse:
        """Execute revoke flow.

        Raises:
            NotFoundError: If the delegation does not exist
            NotAuthorizedError: If the caller did not issue it
            BusinessRuleViolationError: If it is not active
        """
        revoked = await self.delegate_service.revoke(
            DelegateId(request.delegate_id), UserId(UUID(request.owner_user_id))
        )
        return RevokeDelegateResponse(delegate_id=str(revoked.id), status=revoked.status)
