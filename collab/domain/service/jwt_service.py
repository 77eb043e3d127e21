"""JWT token domain service."""

from uuid import UUID

import logfire

from collab.config import AuthSettings
from collab.domain.value import DelegateEmail, SessionIdentity, UserId
from collab.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, email: str | None) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            email: Account email, if any

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, email, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def identity_from_token(self, token: str) -> SessionIdentity:
        """Build the session identity carried by a token.

        A malformed email claim is dropped rather than failing the session;
        the identity then simply has nothing to match invitations against.

        Raises:
            JWTError: If token is invalid, expired, or has a bad user_id
        """
        payload = self.verify_token(token)
        try:
            user_id = UserId(UUID(payload.user_id))
        except ValueError:
            raise JWTError("Invalid token subject")

        email = None
        if payload.email:
            try:
                email = DelegateEmail(payload.email)
            except ValueError:
                logfire.warn("Ignoring malformed email claim", user_id=payload.user_id)

        return SessionIdentity(user_id=user_id, email=email)
