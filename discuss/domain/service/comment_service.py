"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from discuss.config import CommentSettings
from discuss.domain.error import InvalidParentError, NotFoundError, ValidationError
from discuss.domain.model.comment import MAX_CONTENT_LENGTH, Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import Caller, CommentId, CommentOrder, PostId

from .base import Service


def normalize_content(content: str, max_length: int = MAX_CONTENT_LENGTH) -> str:
    """Strip surrounding whitespace and enforce content limits.

    Length is counted in code points.

    Args:
        content: Raw comment text
        max_length: Maximum allowed length after stripping

    Returns:
        The stripped content

    Raises:
        ValidationError: If the content is blank or too long
    """
    text = content.strip()
    if not text:
        raise ValidationError("Comment content must not be empty")
    if len(text) > max_length:
        raise ValidationError(
            f"Comment content must be at most {max_length} characters"
        )
    return text


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            settings: Comment engine limits
        """
        self.comment_repository = comment_repository
        self.settings = settings

    async def create_comment(
        self,
        post_id: PostId,
        author: Caller,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a root comment on a post or a reply to another comment.

        The level is always derived from the parent; callers cannot set it.

        Args:
            post_id: Post ID
            author: Authenticated caller creating the comment
            content: Comment text
            parent_id: Parent comment ID for replies (None for root comments)

        Returns:
            Created comment with zeroed counters

        Raises:
            ValidationError: If content is invalid or the tree is too deep
            NotFoundError: If the parent comment does not exist
            InvalidParentError: If the parent belongs to another post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author.user_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            text = normalize_content(content, self.settings.max_content_length)

            level = 0
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Parent comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise InvalidParentError(str(parent_id), str(post_id))
                level = parent.level + 1
                if level > self.settings.max_depth:
                    raise ValidationError(
                        f"Replies cannot be nested deeper than {self.settings.max_depth} levels"
                    )

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                parent_id=parent_id,
                author_id=author.user_id,
                author_display_name=author.display_name,
                author_avatar_url=author.avatar_url,
                content=text,
                level=level,
                likes_count=0,
                replies_count=0,
                created_at=datetime.now(),  # Replaced by the store
            )

            saved = await self.comment_repository.create(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                level=level,
            )
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            The comment

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def list_children(
        self,
        post_id: PostId,
        parent_id: CommentId | None,
        order: CommentOrder,
        limit: int,
        offset: int,
    ) -> tuple[list[Comment], int]:
        """List a window of direct children along with the total count.

        Used both for top-level pages (``parent_id=None``) and for
        offset-based reply windows.

        Args:
            post_id: Post ID
            parent_id: Parent comment ID, or None for root comments
            order: Sort order
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            Tuple of (children, total number of children)
        """
        with logfire.span(
            "comment_service.list_children",
            post_id=str(post_id),
            parent_id=str(parent_id) if parent_id else None,
            order=order.value,
            limit=limit,
            offset=offset,
        ):
            children = await self.comment_repository.find_children(
                post_id=post_id,
                parent_id=parent_id,
                order=order,
                limit=limit,
                offset=offset,
            )
            total = await self.comment_repository.count_children(post_id, parent_id)
            logfire.info("Children listed", count=len(children), total=total)
            return children, total

    async def get_reply_previews(
        self, parent_ids: list[CommentId]
    ) -> dict[CommentId, list[Comment]]:
        """Get the embedded reply preview for each parent.

        Args:
            parent_ids: Parent comment IDs

        Returns:
            Mapping of parent ID to its first replies in NEWEST order
        """
        if not parent_ids or self.settings.reply_preview_size == 0:
            return {parent_id: [] for parent_id in parent_ids}

        return await self.comment_repository.find_reply_previews(
            parent_ids, self.settings.reply_preview_size
        )

    async def get_replies_after(
        self,
        parent_id: CommentId,
        after_id: CommentId | None,
        limit: int,
    ) -> list[Comment]:
        """Get direct replies after a cursor in NEWEST order.

        Args:
            parent_id: Parent comment ID
            after_id: Last reply already shown (None to start from the top)
            limit: Maximum number of replies to return

        Returns:
            Replies strictly after the cursor

        Raises:
            NotFoundError: If the cursor comment does not exist
            ValidationError: If the cursor is not a direct reply of the parent
        """
        cursor = None
        if after_id:
            cursor = await self.comment_repository.find_by_id(after_id)
            if not cursor:
                raise NotFoundError("Cursor comment", str(after_id))
            if cursor.parent_id != parent_id:
                raise ValidationError(
                    f"Comment {after_id} is not a reply to {parent_id}"
                )

        return await self.comment_repository.find_children_after(
            parent_id, cursor, limit
        )
