"""Like ledger domain service."""

from typing import Sequence

import logfire

from discuss.config import CommentSettings
from discuss.domain.error import ConflictError
from discuss.domain.repository import LikeRepository
from discuss.domain.value import CommentId, LikeState, UserId

from .base import Service
from .comment_service import CommentService


class LikeService(Service):
    """Domain service for like operations."""

    def __init__(
        self,
        like_repository: LikeRepository,
        comment_service: CommentService,
        settings: CommentSettings,
    ) -> None:
        """Initialize like service.

        Args:
            like_repository: Like repository
            comment_service: Comment domain service
            settings: Comment engine limits
        """
        self.like_repository = like_repository
        self.comment_service = comment_service
        self.settings = settings

    async def toggle_like(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Flip the caller's like on a comment.

        There is a single toggle operation: applying it twice restores the
        original state. Lost races are retried up to
        ``settings.conflict_retries`` times.

        Args:
            comment_id: Comment ID
            user_id: User ID

        Returns:
            Resulting like membership and likes_count

        Raises:
            NotFoundError: If the comment does not exist
            ConflictError: If every retry lost a race
        """
        with logfire.span(
            "like_service.toggle_like", comment_id=str(comment_id), user_id=str(user_id)
        ):
            # Raises NotFoundError
            await self.comment_service.get_comment(comment_id)

            attempt = 0
            while True:
                attempt += 1
                try:
                    state = await self.like_repository.toggle(comment_id, user_id)
                except ConflictError:
                    if attempt > self.settings.conflict_retries:
                        logfire.error(
                            "Like toggle conflict persisted",
                            comment_id=str(comment_id),
                            user_id=str(user_id),
                            attempts=attempt,
                        )
                        raise
                    logfire.warn(
                        "Like toggle conflict, retrying",
                        comment_id=str(comment_id),
                        user_id=str(user_id),
                        attempt=attempt,
                    )
                    continue

                logfire.info(
                    "Like toggled",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                    liked=state.liked,
                    likes_count=state.likes_count,
                )
                return state

    async def liked_comment_ids(
        self, user_id: UserId | None, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Check which comments a user likes.

        Args:
            user_id: User ID, or None for anonymous callers
            comment_ids: Comment IDs to check

        Returns:
            Set of liked comment IDs (empty for anonymous callers)
        """
        if user_id is None or not comment_ids:
            return set()

        # Batch query to avoid N+1
        return await self.like_repository.find_liked_comment_ids(
            user_id, list(comment_ids)
        )
