"""PostgreSQL implementation of Comment repository."""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import desc, func, insert, select, tuple_, update
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import NotFoundError
from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentId, CommentOrder, PostId
from discuss.persistence.mappers import comment_to_dict, row_to_comment
from discuss.persistence.tables import comments_table

_NEWEST = (desc(comments_table.c.created_at), desc(comments_table.c.id))


def _order_by(order: CommentOrder) -> tuple[Any, ...]:
    if order == CommentOrder.MOST_LIKED:
        return (desc(comments_table.c.likes_count), *_NEWEST)
    return _NEWEST


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _children_filter(self, post_id: PostId, parent_id: Optional[CommentId]):
        parent_clause = (
            comments_table.c.parent_id.is_(None)
            if parent_id is None
            else comments_table.c.parent_id == parent_id
        )
        return (comments_table.c.post_id == post_id, parent_clause)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def create(self, comment: Comment) -> Comment:
        """Insert a comment and bump its parent's replies_count in one savepoint."""
        async with self.session.begin_nested():
            if comment.parent_id:
                # Row lock on the parent serializes concurrent replies
                bump = (
                    update(comments_table)
                    .where(comments_table.c.id == comment.parent_id)
                    .values(replies_count=comments_table.c.replies_count + 1)
                )
                result = await self.session.execute(bump)
                if result.rowcount == 0:  # type: ignore[attr-defined]
                    raise NotFoundError("Parent comment", str(comment.parent_id))

            values = comment_to_dict(comment)
            values["created_at"] = func.clock_timestamp()
            stmt = insert(comments_table).values(**values).returning(comments_table)
            result = await self.session.execute(stmt)
            row = result.fetchone()

        await self.session.flush()
        return row_to_comment(row._asdict()) if row else comment

    async def find_children(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        order: CommentOrder = CommentOrder.NEWEST,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find direct children ordered by ``order`` with NEWEST tie-breaks."""
        stmt = (
            select(comments_table)
            .where(*self._children_filter(post_id, parent_id))
            .order_by(*_order_by(order))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_children(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> int:
        """Count direct children of a parent, or root comments of a post."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(*self._children_filter(post_id, parent_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_children_after(
        self,
        parent_id: CommentId,
        cursor: Optional[Comment],
        limit: int,
    ) -> List[Comment]:
        """Keyset scan on (created_at, id) descending."""
        stmt = select(comments_table).where(comments_table.c.parent_id == parent_id)

        if cursor is not None:
            stmt = stmt.where(
                tuple_(comments_table.c.created_at, comments_table.c.id)
                < tuple_(cursor.created_at, cursor.id)
            )

        stmt = stmt.order_by(*_NEWEST).limit(limit)
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_reply_previews(
        self, parent_ids: Sequence[CommentId], limit: int
    ) -> Dict[CommentId, List[Comment]]:
        """Fetch the first replies of each parent in a single windowed query."""
        previews: Dict[CommentId, List[Comment]] = {pid: [] for pid in parent_ids}
        if not parent_ids or limit <= 0:
            return previews

        rank = (
            func.row_number()
            .over(partition_by=comments_table.c.parent_id, order_by=_NEWEST)
            .label("rank")
        )
        ranked = (
            select(comments_table, rank)
            .where(comments_table.c.parent_id.in_(parent_ids))
            .subquery()
        )
        stmt = (
            select(ranked)
            .where(ranked.c.rank <= limit)
            .order_by(ranked.c.parent_id, ranked.c.rank)
        )

        result = await self.session.execute(stmt)
        for row in result.fetchall():
            reply = row_to_comment(row._asdict())
            if reply.parent_id is not None:
                previews.setdefault(reply.parent_id, []).append(reply)
        return previews
