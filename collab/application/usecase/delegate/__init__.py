"""Delegate use cases."""

from collab.application.usecase.delegate.check_access import (
    CheckAccessRequest,
    CheckAccessResponse,
    CheckAccessUseCase,
)
from collab.application.usecase.delegate.get_access import (
    GetAccessRequest,
    GetAccessResponse,
    GetAccessUseCase,
)
from collab.application.usecase.delegate.list_delegates import (
    ListDelegatesRequest,
    ListDelegatesResponse,
    ListDelegatesUseCase,
)
from collab.application.usecase.delegate.revoke_delegate import (
    RevokeDelegateRequest,
    RevokeDelegateResponse,
    RevokeDelegateUseCase,
)

__all__ = [
    "CheckAccessRequest",
    "CheckAccessResponse",
    "CheckAccessUseCase",
    "GetAccessRequest",
    "GetAccessResponse",
    "GetAccessUseCase",
    "ListDelegatesRequest",
    "ListDelegatesResponse",
    "ListDelegatesUseCase",
    "RevokeDelegateRequest",
    "RevokeDelegateResponse",
    "RevokeDelegateUseCase",
]
