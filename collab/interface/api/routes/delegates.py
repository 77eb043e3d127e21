"""Delegate access routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from collab.application.usecase.delegate import (
    CheckAccessRequest,
    CheckAccessResponse,
    CheckAccessUseCase,
    GetAccessRequest,
    GetAccessResponse,
    GetAccessUseCase,
    ListDelegatesRequest,
    ListDelegatesResponse,
    ListDelegatesUseCase,
    RevokeDelegateRequest,
    RevokeDelegateResponse,
    RevokeDelegateUseCase,
)
from collab.domain.error import DomainError
from collab.domain.service import JWTService
from collab.domain.value import AccountType
from collab.interface.api.routes.auth import require_identity
from collab.interface.error import to_http_exception

router = APIRouter(prefix="/delegates", tags=["delegates"], route_class=DishkaRoute)


@router.get("/access", response_model=GetAccessResponse)
async def get_access(
    get_access_use_case: FromDishka[GetAccessUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    account_type: AccountType | None = Query(default=None),
) -> GetAccessResponse:
    """Get the profiles the caller may act on behalf of.

    Args:
        get_access_use_case: Get access use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        account_type: Optional filter (brand, creator)

    Raises:
        HTTPException: 401 if not authenticated, 503 if unresolved
    """
    identity = require_identity(jwt_service, auth_token)

    try:
        return await get_access_use_case.execute(
            GetAccessRequest(identity=identity, account_type=account_type)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/access/check", response_model=CheckAccessResponse)
async def check_access(
    check_access_use_case: FromDishka[CheckAccessUseCase],
    jwt_service: FromDishka[JWTService],
    profile_id: UUID = Query(...),
    account_type: AccountType = Query(...),
    auth_token: str | None = Cookie(default=None),
) -> CheckAccessResponse:
    """Check whether the caller may manage a profile.

    Raises:
        HTTPException: 401 if not authenticated, 503 if unresolved
    """
    identity = require_identity(jwt_service, auth_token)

    try:
        return await check_access_use_case.execute(
            CheckAccessRequest(
                identity=identity, profile_id=profile_id, account_type=account_type
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/profiles/{profile_id}", response_model=ListDelegatesResponse)
async def list_delegates(
    profile_id: UUID,
    list_delegates_use_case: FromDishka[ListDelegatesUseCase],
    jwt_service: FromDishka[JWTService],
    account_type: AccountType = Query(...),
    auth_token: str | None = Cookie(default=None),
) -> ListDelegatesResponse:
    """List pending and active team members of a profile.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the owner
    """
    identity = require_identity(jwt_service, auth_token)

    try:
        return await list_delegates_use_case.execute(
            ListDelegatesRequest(
                owner_user_id=str(identity.user_id),
                profile_id=profile_id,
                account_type=account_type,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{delegate_id}/revoke", response_model=RevokeDelegateResponse)
async def revoke_delegate(
    delegate_id: UUID,
    revoke_delegate_use_case: FromDishka[RevokeDelegateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RevokeDelegateResponse:
    """Revoke a team member's access.

    Raises:
        HTTPException: 401, 403 (not owner), 404 (unknown), 409 (not active)
    """
    identity = require_identity(jwt_service, auth_token)

    try:
        return await revoke_delegate_use_case.execute(
            RevokeDelegateRequest(
                owner_user_id=str(identity.user_id), delegate_id=delegate_id
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
