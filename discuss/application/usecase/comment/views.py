"""Comment representations shared by the comment and like use cases."""

from datetime import datetime
from typing import Iterable
from uuid import UUID

from pydantic import BaseModel, Field

from discuss.domain.error import ValidationError
from discuss.domain.model import Comment
from discuss.domain.value import CommentId


class AuthorView(BaseModel):
    """Author details denormalized onto a comment."""

    id: str
    display_name: str
    avatar_url: str | None = None


class CommentView(BaseModel):
    """Comment item in responses.

    ``replies`` holds at most the configured preview of direct replies and
    is never exhaustive; compare against ``replies_count``.
    """

    id: str
    post_id: str
    parent_id: str | None
    author: AuthorView
    content: str
    level: int
    likes_count: int
    replies_count: int
    is_liked_by_caller: bool
    created_at: datetime
    replies: list["CommentView"] = Field(default_factory=list)


class PaginationView(BaseModel):
    """Pagination metadata for top-level listings."""

    page: int
    page_size: int
    has_more: bool
    total_count: int


def parse_id(value: str, kind: str) -> UUID:
    """Parse a UUID path or body value.

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid {kind} id: {value}")


def to_comment_view(
    comment: Comment,
    liked_ids: set[CommentId],
    replies: Iterable[Comment] = (),
) -> CommentView:
    """Convert a comment (and its embedded replies) into a response item."""
    return CommentView(
        id=str(comment.id),
        post_id=str(comment.post_id),
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        author=AuthorView(
            id=str(comment.author_id),
            display_name=comment.author_display_name.root,
            avatar_url=comment.author_avatar_url,
        ),
        content=comment.content,
        level=comment.level,
        likes_count=comment.likes_count,
        replies_count=comment.replies_count,
        is_liked_by_caller=comment.id in liked_ids,
        created_at=comment.created_at,
        replies=[to_comment_view(reply, liked_ids) for reply in replies],
    )
