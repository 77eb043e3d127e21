"""Application layer DI providers."""

from dishka import Scope, provide

from collab.application.usecase.delegate import (
    CheckAccessUseCase,
    GetAccessUseCase,
    ListDelegatesUseCase,
    RevokeDelegateUseCase,
)
from collab.application.usecase.session import StartSessionUseCase
from collab.domain.service import DelegateService
from collab.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider."""

    @provide(scope=Scope.REQUEST)
    def get_start_session_use_case(
        self, delegate_service: DelegateService
    ) -> StartSessionUseCase:
        """Provide start session use case."""
        return StartSessionUseCase(delegate_service=delegate_service)

    @provide(scope=Scope.REQUEST)
    def get_get_access_use_case(
        self, delegate_service: DelegateService
    ) -> GetAccessUseCase:
        """Provide get access use case."""
        return GetAccessUseCase(delegate_service=delegate_service)

    @provide(scope=Scope.REQUEST)
    def get_check_access_use_case(
        self, delegate_service: DelegateService
    ) -> CheckAccessUseCase:
        """Provide check access use case."""
        return CheckAccessUseCase(delegate_service=delegate_service)

    @provide(scope=Scope.REQUEST)
    def get_list_delegates_use_case(
        self, delegate_service: DelegateService
    ) -> ListDelegatesUseCase:
        """Provide list delegates use case."""
        return ListDelegatesUseCase(delegate_service=delegate_service)

    @provide(scope=Scope.REQUEST)
    def get_revoke_delegate_use_case(
        self, delegate_service: DelegateService
    ) -> RevokeDelegateUseCase:
        """Provide revoke delegate use case."""
        return RevokeDelegateUseCase(delegate_service=delegate_service)
