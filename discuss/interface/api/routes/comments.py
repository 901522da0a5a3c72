"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from discuss.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    LoadRepliesRequest,
    LoadRepliesResponse,
    LoadRepliesUseCase,
)
from discuss.domain.error import DomainError
from discuss.domain.value import CommentOrder
from discuss.interface.api.session import SessionToken
from discuss.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


def _reject(action: str, error: DomainError) -> HTTPException:
    exc = to_http_exception(error)
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logfire.error(f"{action} failed", error=str(error))
    else:
        logfire.warn(f"{action} rejected", error=str(error), status=exc.status_code)
    return exc


@router.get("/posts/{post_id}/comments", response_model=ListCommentsResponse)
async def list_comments(
    post_id: str,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    auth_token: SessionToken,
    page: int = 1,
    page_size: int | None = None,
    order: CommentOrder = CommentOrder.NEWEST,
) -> ListCommentsResponse:
    """List top-level comments for a post, each with its first replies.

    Authentication is optional; when present, ``is_liked_by_caller`` is filled in.

    Args:
        post_id: Post UUID
        list_comments_use_case: List comments use case from DI
        auth_token: Session token (Bearer header or cookie)
        page: 1-based page number
        page_size: Comments per page
        order: ``newest`` or ``most_liked``

    Returns:
        Page of comments with pagination metadata
    """
    try:
        return await list_comments_use_case.execute(
            ListCommentsRequest(
                post_id=post_id,
                page=page,
                page_size=page_size,
                order=order,
                auth_token=auth_token,
            )
        )
    except DomainError as e:
        raise _reject("List comments", e)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str
    parent_id: str | None = None  # Parent comment ID for replies


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    auth_token: SessionToken,
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment content and optional parent
        create_comment_use_case: Create comment use case from DI
        auth_token: Session token (Bearer header or cookie)

    Returns:
        Created comment

    Raises:
        HTTPException: 401 unauthenticated, 400 invalid, 404 unknown parent
    """
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=post_id,
                content=request.content,
                parent_id=request.parent_id,
                auth_token=auth_token,
            )
        )
    except DomainError as e:
        raise _reject("Create comment", e)


@router.get("/comments/{comment_id}", response_model=GetCommentResponse)
async def get_comment(
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
    auth_token: SessionToken,
) -> GetCommentResponse:
    """Get a single comment with its reply preview."""
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(comment_id=comment_id, auth_token=auth_token)
        )
    except DomainError as e:
        raise _reject("Get comment", e)


@router.get("/comments/{comment_id}/replies", response_model=LoadRepliesResponse)
async def load_replies(
    comment_id: str,
    load_replies_use_case: FromDishka[LoadRepliesUseCase],
    auth_token: SessionToken,
    after_id: str | None = None,
) -> LoadRepliesResponse:
    """Load the next batch of replies after ``after_id``.

    Args:
        comment_id: Parent comment UUID
        load_replies_use_case: Load replies use case from DI
        auth_token: Session token (Bearer header or cookie)
        after_id: Last reply the client already shows

    Returns:
        Replies in newest-first order and whether more remain
    """
    try:
        return await load_replies_use_case.execute(
            LoadRepliesRequest(
                comment_id=comment_id, after_id=after_id, auth_token=auth_token
            )
        )
    except DomainError as e:
        raise _reject("Load replies", e)
