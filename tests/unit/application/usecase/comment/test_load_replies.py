"""Unit tests for LoadRepliesUseCase."""

from uuid import uuid4

import pytest

from discuss.application.usecase.comment import (
    LoadRepliesRequest,
    LoadRepliesUseCase,
)
from discuss.domain.error import NotFoundError, ValidationError
from discuss.domain.service import CommentService
from discuss.domain.value import PostId
from tests.conftest import make_caller
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestLoadRepliesUseCase:
    """Tests for LoadRepliesUseCase."""

    @pytest.mark.asyncio
    async def test_follows_cursor(self, unit_env):
        """Passing the last reply shown returns the ones after it."""
        # Arrange
        use_case = await unit_env.get(LoadRepliesUseCase)
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        author = make_caller()
        root = await comment_service.create_comment(post_id, author, "root")
        for i in range(12):
            await comment_service.create_comment(post_id, author, f"r{i}", root.id)

        # Act
        first = await use_case.execute(LoadRepliesRequest(comment_id=str(root.id)))
        second = await use_case.execute(
            LoadRepliesRequest(comment_id=str(root.id), after_id=first.replies[-1].id)
        )

        # Assert
        assert len(first.replies) == 10
        assert first.has_more is True
        assert [r.content for r in second.replies] == ["r1", "r0"]
        assert second.has_more is False
        assert all(r.parent_id == str(root.id) for r in second.replies)

    @pytest.mark.asyncio
    async def test_cursor_from_other_thread_rejected(self, unit_env):
        """A cursor that is not a reply of this comment is invalid."""
        # Arrange
        use_case = await unit_env.get(LoadRepliesUseCase)
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        author = make_caller()
        root = await comment_service.create_comment(post_id, author, "root")
        other = await comment_service.create_comment(post_id, author, "other")

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                LoadRepliesRequest(comment_id=str(root.id), after_id=str(other.id))
            )

    @pytest.mark.asyncio
    async def test_unknown_comment_raises(self, unit_env):
        """Expanding a missing comment is not found."""
        # Arrange
        use_case = await unit_env.get(LoadRepliesUseCase)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(LoadRepliesRequest(comment_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_empty_cursor_rejected(self, unit_env):
        """An empty cursor is malformed, not a request for the first batch."""
        # Arrange
        use_case = await unit_env.get(LoadRepliesUseCase)
        comment_service = await unit_env.get(CommentService)
        root = await comment_service.create_comment(
            PostId(uuid4()), make_caller(), "root"
        )

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                LoadRepliesRequest(comment_id=str(root.id), after_id="")
            )
