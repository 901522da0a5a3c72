"""Shared in-memory state for the comment and like repositories.

Both repositories operate on one store so that the like ledger can adjust
the cached counter on the same comment records the comment repository
serves.
"""

import asyncio
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Dict, Hashable, Optional, Tuple

from discuss.domain.model import Comment, Like
from discuss.domain.value import CommentId, UserId


class InMemoryCommentStore:
    """Comment rows, like rows and per-key locks.

    Each mutation runs as a single critical section under the lock for its
    key. Counter read-modify-write happens without suspension points, so it
    is atomic with respect to other tasks on the event loop.
    """

    def __init__(self) -> None:
        self.comments: Dict[CommentId, Comment] = {}
        self.likes: Dict[Tuple[CommentId, UserId], Like] = {}
        self._locks: Dict[Hashable, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._last_timestamp: Optional[datetime] = None

    def lock(self, key: Hashable) -> asyncio.Lock:
        """Get the lock serializing writes for ``key``."""
        return self._locks[key]

    def next_timestamp(self) -> datetime:
        """Return a strictly increasing creation timestamp."""
        now = datetime.now(timezone.utc)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def adjust(self, comment_id: CommentId, **deltas: int) -> Comment:
        """Apply counter deltas to a stored comment and return the new record."""
        comment = self.comments[comment_id]
        updated = comment.model_copy(
            update={
                field: getattr(comment, field) + delta
                for field, delta in deltas.items()
            }
        )
        self.comments[comment_id] = updated
        return updated
