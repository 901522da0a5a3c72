"""Like routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status

from discuss.application.usecase.like import (
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from discuss.domain.error import DomainError
from discuss.interface.api.session import SessionToken
from discuss.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["likes"], route_class=DishkaRoute)


async def _toggle(
    comment_id: str, use_case: ToggleLikeUseCase, auth_token: str | None
) -> ToggleLikeResponse:
    try:
        return await use_case.execute(
            ToggleLikeRequest(comment_id=comment_id, auth_token=auth_token)
        )
    except DomainError as e:
        exc = to_http_exception(e)
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logfire.error("Like toggle failed", comment_id=comment_id, error=str(e))
        else:
            logfire.warn("Like toggle rejected", comment_id=comment_id, error=str(e))
        raise exc


@router.post("/{comment_id}/like", response_model=ToggleLikeResponse)
async def like_comment(
    comment_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    auth_token: SessionToken,
) -> ToggleLikeResponse:
    """Toggle the caller's like on a comment.

    Requires authentication. ``POST`` and ``DELETE`` are the same operation,
    so replayed or crossed requests converge instead of erroring.
    """
    return await _toggle(comment_id, toggle_like_use_case, auth_token)


@router.delete("/{comment_id}/like", response_model=ToggleLikeResponse)
async def unlike_comment(
    comment_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    auth_token: SessionToken,
) -> ToggleLikeResponse:
    """Toggle the caller's like on a comment (alias of ``POST``)."""
    return await _toggle(comment_id, toggle_like_use_case, auth_token)
