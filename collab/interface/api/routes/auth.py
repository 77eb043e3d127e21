"""Session token helpers shared by routes."""

from fastapi import HTTPException, status

from collab.domain.service import JWTService
from collab.domain.value import SessionIdentity
from collab.util.jwt import JWTError


def require_identity(jwt_service: JWTService, auth_token: str | None) -> SessionIdentity:
    """Resolve the session identity from the auth cookie.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return jwt_service.identity_from_token(auth_token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
