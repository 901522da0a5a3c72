"""In-memory like repository for testing."""

import asyncio
from datetime import datetime, timezone
from typing import Sequence, Set

from discuss.domain.error import NotFoundError
from discuss.domain.model import Like
from discuss.domain.repository.like import LikeRepository
from discuss.domain.value import CommentId, LikeState, UserId

from .store import InMemoryCommentStore


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self, store: InMemoryCommentStore) -> None:
        self.store = store

    async def toggle(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Flip the membership row and the cached counter together."""
        key = (comment_id, user_id)
        async with self.store.lock(("like", comment_id, user_id)):
            await asyncio.sleep(0)

            if comment_id not in self.store.comments:
                raise NotFoundError("Comment", str(comment_id))

            if key in self.store.likes:
                del self.store.likes[key]
                comment = self.store.adjust(comment_id, likes_count=-1)
                return LikeState(liked=False, likes_count=comment.likes_count)

            self.store.likes[key] = Like(
                comment_id=comment_id,
                user_id=user_id,
                created_at=datetime.now(timezone.utc),
            )
            comment = self.store.adjust(comment_id, likes_count=1)
            return LikeState(liked=True, likes_count=comment.likes_count)

    async def exists(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Check whether the user currently likes the comment."""
        return (comment_id, user_id) in self.store.likes

    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> Set[CommentId]:
        """Return the liked subset of comment_ids."""
        return {cid for cid in comment_ids if (cid, user_id) in self.store.likes}

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count like rows referencing a comment."""
        return sum(1 for cid, _ in self.store.likes if cid == comment_id)
