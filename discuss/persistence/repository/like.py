"""PostgreSQL implementation of the like ledger."""

from datetime import datetime
from typing import Sequence, Set

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import ConflictError, NotFoundError
from discuss.domain.model import Like
from discuss.domain.repository import LikeRepository
from discuss.domain.value import CommentId, LikeState, UserId
from discuss.persistence.mappers import like_to_dict
from discuss.persistence.tables import comment_likes_table, comments_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _key(self, comment_id: CommentId, user_id: UserId):
        return and_(
            comment_likes_table.c.comment_id == comment_id,
            comment_likes_table.c.user_id == user_id,
        )

    async def toggle(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Delete-or-insert the membership row and adjust likes_count.

        Runs inside a savepoint so a lost race leaves nothing behind. The
        primary key on (comment_id, user_id) serializes concurrent toggles:
        an insert that collides with a concurrent one returns no row and is
        reported as a conflict for the caller to retry.
        """
        async with self.session.begin_nested():
            removed = await self.session.execute(
                delete(comment_likes_table)
                .where(self._key(comment_id, user_id))
                .returning(comment_likes_table.c.comment_id)
            )
            if removed.fetchone() is not None:
                liked, delta = False, -1
            else:
                like = Like(
                    comment_id=comment_id, user_id=user_id, created_at=datetime.now()
                )
                inserted = await self.session.execute(
                    pg_insert(comment_likes_table)
                    .values(**like_to_dict(like))
                    .on_conflict_do_nothing(
                        index_elements=[
                            comment_likes_table.c.comment_id,
                            comment_likes_table.c.user_id,
                        ]
                    )
                    .returning(comment_likes_table.c.comment_id)
                )
                if inserted.fetchone() is None:
                    raise ConflictError("like", f"{comment_id}:{user_id}")
                liked, delta = True, 1

            counted = await self.session.execute(
                update(comments_table)
                .where(comments_table.c.id == comment_id)
                .values(likes_count=comments_table.c.likes_count + delta)
                .returning(comments_table.c.likes_count)
            )
            likes_count = counted.scalar_one_or_none()
            if likes_count is None:
                raise NotFoundError("Comment", str(comment_id))

        await self.session.flush()
        return LikeState(liked=liked, likes_count=likes_count)

    async def exists(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Check whether the user currently likes the comment."""
        stmt = select(comment_likes_table.c.comment_id).where(
            self._key(comment_id, user_id)
        )
        result = await self.session.execute(stmt)
        return result.fetchone() is not None

    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> Set[CommentId]:
        """Return the liked subset of comment_ids (batch query)."""
        if not comment_ids:
            return set()

        stmt = select(comment_likes_table.c.comment_id).where(
            and_(
                comment_likes_table.c.user_id == user_id,
                comment_likes_table.c.comment_id.in_(comment_ids),
            )
        )
        result = await self.session.execute(stmt)
        return {CommentId(row.comment_id) for row in result.fetchall()}

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count like rows referencing a comment."""
        stmt = (
            select(func.count())
            .select_from(comment_likes_table)
            .where(comment_likes_table.c.comment_id == comment_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
