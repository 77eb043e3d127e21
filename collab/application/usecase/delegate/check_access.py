"""Check access use case."""

from uuid import UUID

from pydantic import BaseModel

from collab.domain.service import DelegateService
from collab.domain.value import AccountType, ProfileId, SessionIdentity


class CheckAccessRequest(BaseModel):
    """Check access request."""

    identity: SessionIdentity
    profile_id: UUID
    account_type: AccountType


class CheckAccessResponse(BaseModel):
    """Check access response."""

    profile_id: str
    account_type: AccountType
    has_access: bool


class CheckAccessUseCase:
    """Use case backing brand/creator route guards."""

    def __init__(self, delegate_service: DelegateService) -> None:
        """Initialize check access use case.

        Args:
            delegate_service: Delegate domain service
        """
        self.delegate_service = delegate_service

    async def execute(self, request: CheckAccessRequest) -> CheckAccessResponse:
        """Execute check access flow.

        Args:
            request: Profile to check for the session user

        Returns:
            Whether the user holds an active delegation for the profile

        Raises:
            AccessResolutionError: If access could not be determined. Callers
                must deny access in that case.
        """
        allowed = await self.delegate_service.has_access(
            request.identity, ProfileId(request.profile_id), request.account_type
        )
        return CheckAccessResponse(
            profile_id=str(request.profile_id),
            account_type=request.account_type,
            has_access=allowed,
        )
