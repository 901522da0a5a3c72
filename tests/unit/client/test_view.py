"""Unit tests for rendering the client thread."""

from uuid import uuid4

from discuss.client import (
    CommentCreated,
    CommentDraft,
    PageLoaded,
    Phase,
    ThreadState,
    apply,
    render,
)
from tests.unit.client.factory import make_view

POST_ID = str(uuid4())


class TestRender:
    """Tests for render."""

    def test_nests_loaded_replies(self):
        """Replies render under their parent with the remainder counted."""
        # Arrange
        root = make_view(POST_ID, replies_count=5)
        preview = [make_view(POST_ID, parent=root) for _ in range(3)]
        root = root.model_copy(update={"replies": preview})
        state = apply(
            ThreadState(post_id=POST_ID),
            PageLoaded(page=1, comments=(root,), has_more=False, total_count=1),
        )

        # Act
        (rendered,) = render(state)

        # Assert
        assert rendered.node.content == root.content
        assert [r.node.committed_id for r in rendered.replies] == [
            r.id for r in preview
        ]
        assert rendered.remaining_replies == 2
        assert rendered.can_load_more is True
        assert rendered.replies[0].replies == ()

    def test_nested_reply_with_unloaded_replies_can_load_more(self):
        """A level-1 reply counting unloaded replies offers to load them."""
        # Arrange
        root = make_view(POST_ID, replies_count=1)
        nested = make_view(POST_ID, parent=root, replies_count=2)
        root = root.model_copy(update={"replies": [nested]})
        state = apply(
            ThreadState(post_id=POST_ID),
            PageLoaded(page=1, comments=(root,), has_more=False, total_count=1),
        )

        # Act
        (rendered,) = render(state)

        # Assert
        (reply,) = rendered.replies
        assert rendered.can_load_more is False
        assert reply.remaining_replies == 2
        assert reply.can_load_more is True

    def test_pending_comment_is_flagged(self):
        """Optimistic comments render as pending."""
        # Arrange
        state = apply(
            ThreadState(post_id=POST_ID),
            CommentCreated(
                Phase.OPTIMISTIC,
                "tmp-1",
                CommentDraft(
                    post_id=POST_ID,
                    content="on its way",
                    parent_id=None,
                    author_id=str(uuid4()),
                    author_display_name="me",
                ),
            ),
        )

        # Act
        (rendered,) = render(state)

        # Assert
        assert rendered.is_pending
        assert rendered.node.committed_id is None
        assert rendered.remaining_replies == 0

    def test_empty_state(self):
        """Nothing loaded renders nothing."""
        assert render(ThreadState(post_id=POST_ID)) == []
