"""Domain layer DI providers."""

from dishka import Scope, provide

from collab.config import AuthSettings
from collab.domain.repository import DelegateRepository
from collab.domain.service import DelegateService, JWTService
from collab.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_delegate_service(
        self, delegate_repository: DelegateRepository
    ) -> DelegateService:
        """Provide delegate domain service."""
        return DelegateService(delegate_repository=delegate_repository)
