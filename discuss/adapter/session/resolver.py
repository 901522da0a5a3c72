"""Session resolvers backed by the identity service's tokens."""

from uuid import UUID

import logfire

from discuss.config import AuthSettings
from discuss.domain.service.session import SessionResolver
from discuss.domain.value import Caller, UserId
from discuss.domain.value.types import DisplayName
from discuss.util.jwt import JWTError, verify_token


class JWTSessionResolver(SessionResolver):
    """Resolve callers from JWTs signed with the shared secret."""

    def __init__(self, settings: AuthSettings) -> None:
        self.settings = settings

    async def resolve(self, token: str | None) -> Caller | None:
        """Verify the token and build a caller from its claims.

        Args:
            token: Encoded JWT, or None when the request carried no credentials

        Returns:
            The caller, or None for missing, invalid or expired tokens
        """
        if not token:
            return None

        try:
            payload = verify_token(token, self.settings)
            return Caller(
                user_id=UserId(UUID(payload.user_id)),
                display_name=DisplayName(payload.display_name),
                avatar_url=payload.avatar_url,
            )
        except JWTError as e:
            logfire.info("Session token rejected", reason=str(e))
            return None
        except ValueError as e:  # Includes pydantic validation errors
            logfire.warn("Session token has malformed claims", error=str(e))
            return None


class MockSessionResolver(SessionResolver):
    """Mock resolver for testing.

    Tokens are plain ``"{user_id}|{display_name}"`` strings, so tests can
    act as any user without signing anything.
    """

    @staticmethod
    def token_for(caller: Caller) -> str:
        """Build the token that resolves to ``caller``."""
        return f"{caller.user_id}|{caller.display_name.root}"

    async def resolve(self, token: str | None) -> Caller | None:
        """Decode a mock token.

        Args:
            token: Mock token

        Returns:
            The caller, or None if the token is missing or malformed
        """
        if not token or "|" not in token:
            return None

        user_id, display_name = token.split("|", 1)
        try:
            return Caller(
                user_id=UserId(UUID(user_id)),
                display_name=DisplayName(display_name),
            )
        except ValueError:
            return None
