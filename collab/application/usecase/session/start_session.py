"""Start session use case."""

import logfire
from pydantic import BaseModel

from collab.domain.service import DelegateService
from collab.domain.value import DelegatedAccess, SessionIdentity


class StartSessionRequest(BaseModel):
    """Start session request."""

    identity: SessionIdentity


class StartSessionResponse(BaseModel):
    """Start session response."""

    user_id: str | None
    delegated_access: list[DelegatedAccess]
    activated_invitations: int
    failed_invitations: int


class StartSessionUseCase:
    """Use case run once at the start of every authenticated session."""

    def __init__(self, delegate_service: DelegateService) -> None:
        """Initialize start session use case.

        Args:
            delegate_service: Delegate domain service
        """
        self.delegate_service = delegate_service

    async def execute(self, request: StartSessionRequest) -> StartSessionResponse:
        """Execute session start flow.

        Steps:
        1. Link pending invitations addressed to the session email
        2. Resolve the delegated access, which now includes step 1's writes

        Step 1 never fails the session.

        Args:
            request: Request with the session identity

        Returns:
            Delegated access of the session user

        Raises:
            AccessResolutionError: If delegated access could not be resolved
        """
        identity = request.identity
        with logfire.span(
            "start_session",
            user_id=str(identity.user_id) if identity.user_id else None,
        ):
            outcome = await self.delegate_service.link_pending_invitations(identity)
            access = await self.delegate_service.resolve_access(identity)

            return StartSessionResponse(
                user_id=str(identity.user_id) if identity.user_id else None,
                delegated_access=access,
                activated_invitations=len(outcome.activated),
                failed_invitations=len(outcome.failed),
            )
