"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import logfire

from discuss.config import AuthSettings
from discuss.domain.value import Caller, UserId
from discuss.domain.value.types import DisplayName

# Keep spans local; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)


def make_caller(display_name: str = "alice", avatar_url: str | None = None) -> Caller:
    """Helper function to build an authenticated caller with a fresh user ID.

    Args:
        display_name: Name shown next to the caller's comments
        avatar_url: Optional avatar URL

    Returns:
        Caller value object
    """
    return Caller(
        user_id=UserId(uuid4()),
        display_name=DisplayName(display_name),
        avatar_url=avatar_url,
    )


def make_token(
    user_id: str,
    display_name: str,
    settings: AuthSettings,
    avatar_url: str | None = None,
    expires_in: timedelta = timedelta(days=30),
) -> str:
    """Helper function to mint a session token the way the identity service does.

    Args:
        user_id: User ID claim
        display_name: Name shown next to the user's comments
        settings: Authentication settings holding the shared secret
        avatar_url: Optional avatar URL
        expires_in: Token lifetime; negative values produce an expired token

    Returns:
        Encoded JWT token
    """
    payload = {
        "user_id": user_id,
        "display_name": display_name,
        "avatar_url": avatar_url,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
