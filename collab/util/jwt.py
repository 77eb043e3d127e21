"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError

from collab.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload issued by the identity provider."""

    user_id: str
    email: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(user_id: str, email: str | None, settings: AuthSettings) -> str:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        email: Email address on the account, if any
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "email": email,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValidationError):
        raise JWTError("Invalid token")
