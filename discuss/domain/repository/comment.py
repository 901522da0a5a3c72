"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from discuss.domain.model.comment import Comment
from discuss.domain.value import CommentId, CommentOrder, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment.

        The insert and the increment of the parent's replies_count (when
        ``comment.parent_id`` is set) are applied as one atomic unit: either
        both are visible or neither is.

        The store assigns ``created_at`` so that it is monotonic per store.

        Args:
            comment: The comment to insert, with zeroed counters

        Returns:
            The stored comment

        Raises:
            NotFoundError: If the parent disappeared before the increment
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        order: CommentOrder = CommentOrder.NEWEST,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find direct children of a parent, or root comments of a post.

        Ties are always broken by ``(created_at desc, id desc)`` so that
        pages are deterministic.

        Args:
            post_id: The owning post
            parent_id: Parent comment ID, or None for root comments
            order: Sort order
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of child comments
        """
        pass

    @abstractmethod
    async def count_children(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> int:
        """Count direct children of a parent, or root comments of a post.

        Args:
            post_id: The owning post
            parent_id: Parent comment ID, or None for root comments

        Returns:
            Number of matching comments
        """
        pass

    @abstractmethod
    async def find_children_after(
        self,
        parent_id: CommentId,
        cursor: Optional[Comment],
        limit: int,
    ) -> List[Comment]:
        """Keyset scan of direct children in NEWEST order.

        Returns children strictly after ``cursor`` in
        ``(created_at desc, id desc)`` order, so rows inserted ahead of the
        cursor never shift the scan.

        Args:
            parent_id: Parent comment ID
            cursor: Last child already seen, or None to start from the top
            limit: Maximum number of comments to return

        Returns:
            List of child comments
        """
        pass

    @abstractmethod
    async def find_reply_previews(
        self, parent_ids: Sequence[CommentId], limit: int
    ) -> Dict[CommentId, List[Comment]]:
        """Fetch the first ``limit`` direct replies of each parent (batch query).

        Args:
            parent_ids: Parent comment IDs
            limit: Maximum replies per parent

        Returns:
            Mapping of parent ID to its replies in NEWEST order. Parents
            without replies map to an empty list.
        """
        pass
