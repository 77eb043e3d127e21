"""Domain services."""

from .base import Service
from .delegate_service import DelegateService, LinkOutcome
from .jwt_service import JWTService

__all__ = [
    "DelegateService",
    "JWTService",
    "LinkOutcome",
    "Service",
]
