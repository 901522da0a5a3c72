"""Integration tests for the PostgreSQL comment and like repositories.

These run against a migrated database reached through DATABASE__URL and
are skipped when it is not set. Each test runs in one request-scoped
session, so everything it writes is committed when the test ends; IDs are
random so tests never collide.
"""

import os
from uuid import uuid4

import pytest

from discuss.domain.error import InvalidParentError, NotFoundError
from discuss.domain.repository import CommentRepository, LikeRepository
from discuss.domain.service import CommentService, LikeService, PaginationService
from discuss.domain.value import CommentId, CommentOrder, PostId, UserId
from tests.conftest import make_caller
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
)

# Integration test fixture - real persistence, assumes postgres running
integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresCommentRepository:
    """Integration tests for PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_reply_bumps_parent_counter(self, integration_env):
        """Creating a reply increments the parent's replies_count in the same write."""
        # Arrange
        comment_service = await integration_env.get(CommentService)
        post_id = PostId(uuid4())
        author = make_caller()
        root = await comment_service.create_comment(post_id, author, "root")

        # Act
        reply = await comment_service.create_comment(post_id, author, "reply", root.id)

        # Assert
        assert reply.level == 1
        assert (await comment_service.get_comment(root.id)).replies_count == 1

    @pytest.mark.asyncio
    async def test_missing_parent_leaves_nothing_behind(self, integration_env):
        """A failed reply insert rolls back its savepoint."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        comment_service = await integration_env.get(CommentService)
        post_id = PostId(uuid4())
        root = await comment_service.create_comment(post_id, make_caller(), "root")
        orphan = root.model_copy(
            update={
                "id": CommentId(uuid4()),
                "parent_id": CommentId(uuid4()),
                "level": 1,
            }
        )

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_repo.create(orphan)
        assert await comment_repo.find_by_id(orphan.id) is None
        assert await comment_repo.count_children(post_id, None) == 1

    @pytest.mark.asyncio
    async def test_parent_on_other_post_rejected(self, integration_env):
        """Cross-post replies are refused before anything is written."""
        # Arrange
        comment_service = await integration_env.get(CommentService)
        parent = await comment_service.create_comment(
            PostId(uuid4()), make_caller(), "elsewhere"
        )

        # Act & Assert
        with pytest.raises(InvalidParentError):
            await comment_service.create_comment(
                PostId(uuid4()), make_caller(), "reply", parent.id
            )
        assert (await comment_service.get_comment(parent.id)).replies_count == 0

    @pytest.mark.asyncio
    async def test_previews_and_cursor_expansion(self, integration_env):
        """Windowed previews and keyset batches agree on NEWEST order."""
        # Arrange
        comment_service = await integration_env.get(CommentService)
        pagination_service = await integration_env.get(PaginationService)
        post_id = PostId(uuid4())
        author = make_caller()
        root = await comment_service.create_comment(post_id, author, "root")
        replies = [
            await comment_service.create_comment(post_id, author, f"r{i}", root.id)
            for i in range(12)
        ]
        newest_first = [r.id for r in reversed(replies)]

        # Act
        page = await pagination_service.list_top_level(post_id)
        first = await pagination_service.load_more_replies(root.id)
        second = await pagination_service.load_more_replies(
            root.id, first.replies[-1].id
        )

        # Assert
        assert [r.id for r in page.replies[root.id]] == newest_first[:3]
        assert [r.id for r in first.replies + second.replies] == newest_first
        assert second.has_more is False

    @pytest.mark.asyncio
    async def test_most_liked_order(self, integration_env):
        """MOST_LIKED ranks by likes_count, newest first on ties."""
        # Arrange
        comment_service = await integration_env.get(CommentService)
        like_service = await integration_env.get(LikeService)
        pagination_service = await integration_env.get(PaginationService)
        post_id = PostId(uuid4())
        author = make_caller()
        older = await comment_service.create_comment(post_id, author, "older")
        newer = await comment_service.create_comment(post_id, author, "newer")
        await like_service.toggle_like(older.id, UserId(uuid4()))

        # Act
        page = await pagination_service.list_top_level(
            post_id, order=CommentOrder.MOST_LIKED
        )

        # Assert
        assert [c.id for c in page.comments] == [older.id, newer.id]


class TestPostgresLikeRepository:
    """Integration tests for PostgresLikeRepository."""

    @pytest.mark.asyncio
    async def test_toggle_keeps_counter_and_ledger_in_step(self, integration_env):
        """likes_count always matches the number of like rows."""
        # Arrange
        comment_service = await integration_env.get(CommentService)
        like_repo = await integration_env.get(LikeRepository)
        comment = await comment_service.create_comment(
            PostId(uuid4()), make_caller(), "hello"
        )
        users = [UserId(uuid4()) for _ in range(3)]

        # Act
        for user_id in users:
            await like_repo.toggle(comment.id, user_id)
        state = await like_repo.toggle(comment.id, users[0])

        # Assert
        assert (state.liked, state.likes_count) == (False, 2)
        assert await like_repo.count_by_comment(comment.id) == 2
        assert await like_repo.find_liked_comment_ids(users[1], [comment.id]) == {
            comment.id
        }
        assert not await like_repo.exists(comment.id, users[0])
