"""Unit tests for CommentService."""

import asyncio
from uuid import uuid4

import pytest

from discuss.config import CommentSettings
from discuss.domain.error import InvalidParentError, NotFoundError, ValidationError
from discuss.domain.repository import CommentRepository
from discuss.domain.service import CommentService, PaginationService
from discuss.domain.value import CommentId, CommentOrder, PostId
from discuss.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryCommentStore,
)
from tests.conftest import make_caller
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_root_comment_has_level_zero(self, unit_env):
        """A root comment starts at level 0 with zeroed counters and leads page 1."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        pagination_service = await unit_env.get(PaginationService)
        post_id = PostId(uuid4())
        author = make_caller("Jane")

        # Act
        result = await comment_service.create_comment(
            post_id=post_id, author=author, content="Great trip!"
        )

        # Assert
        assert result.level == 0
        assert result.parent_id is None
        assert result.is_root
        assert result.likes_count == 0
        assert result.replies_count == 0
        assert result.author_id == author.user_id
        assert result.author_display_name.root == "Jane"

        page = await pagination_service.list_top_level(post_id)
        assert page.comments[0].id == result.id

    @pytest.mark.asyncio
    async def test_reply_increments_parent_replies_count(self, unit_env):
        """A reply sits one level below its parent and bumps its replies_count."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        root = await comment_service.create_comment(
            post_id=post_id, author=make_caller("Jane"), content="Great trip!"
        )

        # Act
        reply = await comment_service.create_comment(
            post_id=post_id,
            author=make_caller("Bob"),
            content="Agreed",
            parent_id=root.id,
        )

        # Assert
        assert reply.level == root.level + 1
        assert reply.parent_id == root.id
        parent = await comment_service.get_comment(root.id)
        assert parent.replies_count == 1

    @pytest.mark.asyncio
    async def test_replies_count_tracks_direct_children_only(self, unit_env):
        """Grandchildren do not count toward a root's replies_count."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        author = make_caller()
        root = await comment_service.create_comment(post_id, author, "root")
        child = await comment_service.create_comment(post_id, author, "child", root.id)

        # Act
        grandchild = await comment_service.create_comment(
            post_id, author, "grandchild", child.id
        )

        # Assert
        assert grandchild.level == 2
        assert (await comment_service.get_comment(root.id)).replies_count == 1
        assert (await comment_service.get_comment(child.id)).replies_count == 1

    @pytest.mark.asyncio
    async def test_content_is_stripped(self, unit_env):
        """Surrounding whitespace is removed before storing."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act
        result = await comment_service.create_comment(
            PostId(uuid4()), make_caller(), "   hello world \n"
        )

        # Assert
        assert result.content == "hello world"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t "])
    async def test_blank_content_rejected(self, unit_env, content):
        """Empty or whitespace-only content is a validation error."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.create_comment(PostId(uuid4()), make_caller(), content)

    @pytest.mark.asyncio
    async def test_content_at_limit_accepted(self, unit_env):
        """Exactly 1000 characters is allowed."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act
        result = await comment_service.create_comment(
            PostId(uuid4()), make_caller(), "x" * 1000
        )

        # Assert
        assert len(result.content) == 1000

    @pytest.mark.asyncio
    async def test_content_over_limit_rejected(self, unit_env):
        """1001 characters is one too many."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                PostId(uuid4()), make_caller(), "x" * 1001
            )

    @pytest.mark.asyncio
    async def test_content_length_counts_code_points(self, unit_env):
        """Multi-byte characters count once each."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        content = "é" * 1000  # 2000 bytes in UTF-8

        # Act
        result = await comment_service.create_comment(
            PostId(uuid4()), make_caller(), content
        )

        # Assert
        assert result.content == content

    @pytest.mark.asyncio
    async def test_unknown_parent_rejected(self, unit_env):
        """Replying to a comment that does not exist fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                PostId(uuid4()), make_caller(), "reply", CommentId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_post_rejected_without_side_effects(self, unit_env):
        """A parent from another post creates nothing and bumps no counter."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author = make_caller()
        other_post = PostId(uuid4())
        target_post = PostId(uuid4())
        parent = await comment_service.create_comment(other_post, author, "elsewhere")

        # Act
        with pytest.raises(InvalidParentError) as exc_info:
            await comment_service.create_comment(
                target_post, author, "misplaced reply", parent.id
            )

        # Assert
        assert isinstance(exc_info.value, NotFoundError)
        assert (await comment_service.get_comment(parent.id)).replies_count == 0
        _, total = await comment_service.list_children(
            target_post, None, CommentOrder.NEWEST, limit=10, offset=0
        )
        assert total == 0
        _, replies = await comment_service.list_children(
            other_post, parent.id, CommentOrder.NEWEST, limit=10, offset=0
        )
        assert replies == 0

    @pytest.mark.asyncio
    async def test_depth_limit_enforced(self):
        """Replies deeper than max_depth are rejected."""
        # Arrange
        store = InMemoryCommentStore()
        comment_service = CommentService(
            InMemoryCommentRepository(store), CommentSettings(max_depth=1)
        )
        post_id = PostId(uuid4())
        author = make_caller()
        root = await comment_service.create_comment(post_id, author, "root")
        child = await comment_service.create_comment(post_id, author, "child", root.id)

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.create_comment(post_id, author, "too deep", child.id)
        assert (await comment_service.get_comment(child.id)).replies_count == 0

    @pytest.mark.asyncio
    async def test_concurrent_replies_all_counted(self, unit_env):
        """Concurrent replies to one parent never lose a replies_count update."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        root = await comment_service.create_comment(post_id, make_caller(), "root")

        # Act
        replies = await asyncio.gather(
            *(
                comment_service.create_comment(
                    post_id, make_caller(f"user{i}"), f"reply {i}", root.id
                )
                for i in range(25)
            )
        )

        # Assert
        assert len({reply.id for reply in replies}) == 25
        assert (await comment_service.get_comment(root.id)).replies_count == 25


class TestGetComment:
    """Tests for get_comment method."""

    @pytest.mark.asyncio
    async def test_get_existing_comment(self, unit_env):
        """Should return the stored comment."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        created = await comment_service.create_comment(
            PostId(uuid4()), make_caller(), "hello"
        )

        # Act
        result = await comment_service.get_comment(created.id)

        # Assert
        assert result == created

    @pytest.mark.asyncio
    async def test_get_missing_comment_raises(self, unit_env):
        """Should raise NotFoundError for unknown IDs."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.get_comment(CommentId(uuid4()))

    @pytest.mark.asyncio
    async def test_repository_is_shared_with_service(self, unit_env):
        """Comments created through the service are visible to the repository."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        # Act
        created = await comment_service.create_comment(
            PostId(uuid4()), make_caller(), "hello"
        )

        # Assert
        assert await comment_repo.find_by_id(created.id) == created


class TestGetRepliesAfter:
    """Tests for cursor validation in get_replies_after."""

    @pytest.mark.asyncio
    async def test_unknown_cursor_raises_not_found(self, unit_env):
        """A cursor that does not exist is reported as not found."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        root = await comment_service.create_comment(
            PostId(uuid4()), make_caller(), "root"
        )

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.get_replies_after(root.id, CommentId(uuid4()), 10)

    @pytest.mark.asyncio
    async def test_cursor_from_other_parent_rejected(self, unit_env):
        """A cursor must be a direct reply of the parent being expanded."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        author = make_caller()
        first = await comment_service.create_comment(post_id, author, "first")
        second = await comment_service.create_comment(post_id, author, "second")
        stray = await comment_service.create_comment(post_id, author, "r", second.id)

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.get_replies_after(first.id, stray.id, 10)
