"""Session resolution interface.

The identity collaborator owns credentials. The engine only asks it who is
behind an opaque token.
"""

from discuss.domain.value import Caller


class SessionResolver:
    """Generic interface for resolving a session token into a caller."""

    async def resolve(self, token: str | None) -> Caller | None:
        """Resolve a session token.

        Args:
            token: Opaque session token (may be missing)

        Returns:
            The authenticated caller, or None if the token is missing,
            invalid or expired
        """
        raise NotImplementedError
