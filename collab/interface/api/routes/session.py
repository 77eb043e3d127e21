"""Session routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from collab.application.usecase.session import (
    StartSessionRequest,
    StartSessionResponse,
    StartSessionUseCase,
)
from collab.domain.error import AccessResolutionError
from collab.domain.service import JWTService
from collab.interface.api.routes.auth import require_identity
from collab.interface.error import to_http_exception

router = APIRouter(prefix="/session", tags=["session"], route_class=DishkaRoute)


@router.post("/start", response_model=StartSessionResponse)
async def start_session(
    start_session_use_case: FromDishka[StartSessionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> StartSessionResponse:
    """Link pending invitations and return the caller's delegated access.

    Called by clients right after sign-in.

    Raises:
        HTTPException: 401 if not authenticated, 503 if delegated access
            could not be resolved
    """
    identity = require_identity(jwt_service, auth_token)

    try:
        return await start_session_use_case.execute(
            StartSessionRequest(identity=identity)
        )
    except AccessResolutionError as e:
        raise to_http_exception(e)
