"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from discuss.domain.model import Comment, Like
from discuss.domain.value import CommentId, PostId, UserId
from discuss.domain.value.types import DisplayName


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        author_id=UserId(_uuid(row["author_id"])),
        author_display_name=DisplayName(row["author_display_name"]),
        author_avatar_url=row.get("author_avatar_url"),
        content=row["content"],
        level=row["level"],
        likes_count=row["likes_count"],
        replies_count=row["replies_count"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "parent_id": comment.parent_id,
        "author_id": comment.author_id,
        "author_display_name": comment.author_display_name.root,
        "author_avatar_url": comment.author_avatar_url,
        "content": comment.content,
        "level": comment.level,
        "likes_count": comment.likes_count,
        "replies_count": comment.replies_count,
        "created_at": comment.created_at,
    }


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to database dict."""
    return like.model_dump()
