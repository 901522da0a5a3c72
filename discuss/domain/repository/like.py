"""Like ledger repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence, Set

from discuss.domain.value import CommentId, LikeState, UserId


class LikeRepository(ABC):
    """Repository for Like membership rows and the cached likes_count.

    Defines the contract for like persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def toggle(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Flip the (comment_id, user_id) membership.

        Deletes the row if present, inserts it otherwise, and adjusts the
        comment's likes_count by the matching +1/-1 in the same
        transaction using an atomic increment.

        Args:
            comment_id: The liked comment
            user_id: The user toggling

        Returns:
            Resulting membership and counter

        Raises:
            ConflictError: If a concurrent toggle on the same key won the race
        """
        pass

    @abstractmethod
    async def exists(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Check whether the user currently likes the comment."""
        pass

    @abstractmethod
    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> Set[CommentId]:
        """Return the subset of comment_ids the user likes (batch query).

        Args:
            user_id: The user's ID
            comment_ids: Comment IDs to check

        Returns:
            Set of liked comment IDs
        """
        pass

    @abstractmethod
    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count like rows referencing a comment."""
        pass
