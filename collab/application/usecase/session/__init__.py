"""Session use cases."""

from collab.application.usecase.session.start_session import (
    StartSessionRequest,
    StartSessionResponse,
    StartSessionUseCase,
)

__all__ = [
    "StartSessionRequest",
    "StartSessionResponse",
    "StartSessionUseCase",
]
