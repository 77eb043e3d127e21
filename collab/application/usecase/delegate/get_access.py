"""Get delegated access use case."""

from pydantic import BaseModel

from collab.domain.service import DelegateService
from collab.domain.value import AccountType, DelegatedAccess, SessionIdentity


class GetAccessRequest(BaseModel):
    """Get delegated access request."""

    identity: SessionIdentity
    account_type: AccountType | None = None


class GetAccessResponse(BaseModel):
    """Get delegated access response."""

    delegated_access: list[DelegatedAccess]


class GetAccessUseCase:
    """Use case for reading a user's delegated access without linking."""

    def __init__(self, delegate_service: DelegateService) -> None:
        self.delegate_service = delegate_service

    async def execute(self, request: GetAccessRequest) -> GetAccessResponse:
        """Execute get access flow.

        Raises:
            AccessResolutionError: If delegated access could not be resolved
        """
        access = await self.delegate_service.resolve_access(request.identity)
        if request.account_type is not None:
            access = [a for a in access if a.account_type == request.account_type]
        return GetAccessResponse(delegated_access=access)
