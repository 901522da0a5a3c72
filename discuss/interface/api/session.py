"""Session token extraction for routes."""

from typing import Annotated

from fastapi import Cookie, Depends, Header


async def session_token(
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> str | None:
    """Read the caller's session token.

    A bearer Authorization header wins over the ``auth_token`` cookie.

    Returns:
        The raw token, or None when the request carries no credentials
    """
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return auth_token


SessionToken = Annotated[str | None, Depends(session_token)]
