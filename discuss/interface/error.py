"""Interface layer errors.

Maps domain errors onto HTTP responses.
"""

from fastapi import HTTPException, status

from discuss.domain.error import (
    AuthError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

# Seconds a client should wait before retrying a conflicted write
RETRY_AFTER_SECONDS = 1


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into an HTTPException.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException carrying the error message as detail
    """
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, NotFoundError):
        # InvalidParentError included: the parent is not found on this post
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, AuthError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(error),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(error, ConflictError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(error),
            headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )
