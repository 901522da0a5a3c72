"""In-memory comment repository for testing."""

import asyncio
from typing import Dict, List, Optional, Sequence

from discuss.domain.error import NotFoundError
from discuss.domain.model import Comment
from discuss.domain.repository.comment import CommentRepository
from discuss.domain.value import CommentId, CommentOrder, PostId

from .store import InMemoryCommentStore


def _newest_key(comment: Comment):
    return (comment.created_at, comment.id)


def _sort_key(order: CommentOrder):
    if order == CommentOrder.MOST_LIKED:
        return lambda c: (c.likes_count, c.created_at, c.id)
    return _newest_key


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryCommentStore) -> None:
        self.store = store

    def _children(
        self, post_id: Optional[PostId], parent_id: Optional[CommentId]
    ) -> List[Comment]:
        return [
            c
            for c in self.store.comments.values()
            if c.parent_id == parent_id and (post_id is None or c.post_id == post_id)
        ]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self.store.comments.get(comment_id)

    async def create(self, comment: Comment) -> Comment:
        """Insert a comment and bump its parent's replies_count atomically."""
        key = ("replies", comment.parent_id or comment.id)
        async with self.store.lock(key):
            # Yield so concurrent writers interleave as they would on a server
            await asyncio.sleep(0)

            if comment.parent_id and comment.parent_id not in self.store.comments:
                raise NotFoundError("Parent comment", str(comment.parent_id))

            stored = comment.model_copy(
                update={
                    "created_at": self.store.next_timestamp(),
                    "likes_count": 0,
                    "replies_count": 0,
                }
            )
            self.store.comments[stored.id] = stored
            if stored.parent_id:
                self.store.adjust(stored.parent_id, replies_count=1)
            return stored

    async def find_children(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        order: CommentOrder = CommentOrder.NEWEST,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find direct children ordered by ``order`` with NEWEST tie-breaks."""
        children = sorted(
            self._children(post_id, parent_id), key=_sort_key(order), reverse=True
        )
        return children[offset : offset + limit]

    async def count_children(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> int:
        """Count direct children of a parent, or root comments of a post."""
        return len(self._children(post_id, parent_id))

    async def find_children_after(
        self,
        parent_id: CommentId,
        cursor: Optional[Comment],
        limit: int,
    ) -> List[Comment]:
        """Keyset scan on (created_at, id) descending."""
        children = self._children(None, parent_id)
        if cursor is not None:
            bound = _newest_key(cursor)
            children = [c for c in children if _newest_key(c) < bound]
        return sorted(children, key=_newest_key, reverse=True)[:limit]

    async def find_reply_previews(
        self, parent_ids: Sequence[CommentId], limit: int
    ) -> Dict[CommentId, List[Comment]]:
        """Fetch the first replies of each parent."""
        return {
            parent_id: sorted(
                self._children(None, parent_id), key=_newest_key, reverse=True
            )[:limit]
            for parent_id in parent_ids
        }
