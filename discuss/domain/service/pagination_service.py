"""Pagination domain service.

Top-level comments are paged by offset so that the response can carry a
page number and total count. Replies are expanded by cursor, so replies
created while a reader is expanding a thread never cause duplicates or
gaps.
"""

from dataclasses import dataclass, field

import logfire

from discuss.config import CommentSettings
from discuss.domain.error import ValidationError
from discuss.domain.model.comment import Comment
from discuss.domain.value import CommentId, CommentOrder, PostId

from .base import Service
from .comment_service import CommentService


@dataclass
class CommentPage:
    """One page of top-level comments with their reply previews."""

    comments: list[Comment]
    page: int
    page_size: int
    has_more: bool
    total_count: int
    replies: dict[CommentId, list[Comment]] = field(default_factory=dict)


@dataclass
class ReplyBatch:
    """A batch of direct replies following a cursor."""

    replies: list[Comment]
    has_more: bool


class PaginationService(Service):
    """Domain service for paged comment retrieval."""

    def __init__(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> None:
        self.comment_service = comment_service
        self.settings = settings

    def _resolve_page_size(self, page_size: int | None) -> int:
        if page_size is None:
            return self.settings.page_size
        if page_size < 1 or page_size > self.settings.max_page_size:
            raise ValidationError(
                f"page_size must be between 1 and {self.settings.max_page_size}"
            )
        return page_size

    async def list_top_level(
        self,
        post_id: PostId,
        page: int = 1,
        page_size: int | None = None,
        order: CommentOrder = CommentOrder.NEWEST,
    ) -> CommentPage:
        """List a page of root comments for a post.

        Args:
            post_id: Post ID
            page: 1-based page number
            page_size: Comments per page (defaults to settings.page_size)
            order: Sort order

        Returns:
            CommentPage with reply previews for each comment

        Raises:
            ValidationError: If page or page_size is out of range
        """
        if page < 1:
            raise ValidationError("page must be at least 1")
        size = self._resolve_page_size(page_size)

        with logfire.span(
            "pagination_service.list_top_level",
            post_id=str(post_id),
            page=page,
            page_size=size,
            order=order.value,
        ):
            comments, total = await self.comment_service.list_children(
                post_id=post_id,
                parent_id=None,
                order=order,
                limit=size,
                offset=(page - 1) * size,
            )
            replies = await self.comment_service.get_reply_previews(
                [comment.id for comment in comments]
            )

            return CommentPage(
                comments=comments,
                page=page,
                page_size=size,
                has_more=page * size < total,
                total_count=total,
                replies=replies,
            )

    async def load_more_replies(
        self, comment_id: CommentId, after_id: CommentId | None = None
    ) -> ReplyBatch:
        """Load the next batch of direct replies after a cursor.

        Args:
            comment_id: Parent comment ID
            after_id: Last reply the reader already has (None for the first batch)

        Returns:
            ReplyBatch in NEWEST order

        Raises:
            NotFoundError: If the parent or the cursor does not exist
            ValidationError: If the cursor is not a direct reply of the parent
        """
        with logfire.span(
            "pagination_service.load_more_replies",
            comment_id=str(comment_id),
            after_id=str(after_id) if after_id else None,
        ):
            parent = await self.comment_service.get_comment(comment_id)
            batch_size = self.settings.reply_batch_size

            # Fetch one extra row to learn whether more remain
            rows = await self.comment_service.get_replies_after(
                parent.id, after_id, batch_size + 1
            )
            has_more = len(rows) > batch_size

            logfire.info(
                "Replies loaded",
                comment_id=str(comment_id),
                count=min(len(rows), batch_size),
                has_more=has_more,
            )
            return ReplyBatch(replies=rows[:batch_size], has_more=has_more)
