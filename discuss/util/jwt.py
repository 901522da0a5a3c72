"""JWT token utilities.

Session tokens are minted by the identity service; this module only
verifies them.
"""

from datetime import datetime

import jwt
from pydantic import BaseModel

from discuss.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    display_name: str
    avatar_url: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


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
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
