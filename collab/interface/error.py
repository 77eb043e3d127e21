"""Interface layer errors."""

from fastapi import HTTPException, status

from collab.domain.error import (
    AccessResolutionError,
    BusinessRuleViolationError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into an HTTP error.

    Access resolution failures map to 503 so clients can tell "no access"
    apart from "access unknown" and deny in the latter case.
    """
    if isinstance(error, AccessResolutionError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Delegated access could not be resolved",
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, BusinessRuleViolationError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
