"""Client-side thread state.

The thread is kept as a flat arena: nodes are stored by reference and the
tree shape lives in ``roots`` and ``children``. Nesting is rebuilt only by
``render``. Every field is replaced, never mutated, when the reducer runs.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping

from discuss.application.usecase.comment.views import CommentView

from .refs import Committed, NodeRef


@dataclass(frozen=True)
class CommentNode:
    """A comment as the client currently believes it to be."""

    ref: NodeRef
    parent: NodeRef | None
    post_id: str
    author_id: str
    author_display_name: str
    author_avatar_url: str | None
    content: str
    level: int
    likes_count: int
    replies_count: int
    is_liked_by_caller: bool
    created_at: datetime | None = None  # Unknown until the server confirms

    @property
    def committed_id(self) -> str | None:
        return self.ref.comment_id if isinstance(self.ref, Committed) else None

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentNode":
        """Build a committed node from a server representation."""
        return cls(
            ref=Committed(view.id),
            parent=Committed(view.parent_id) if view.parent_id else None,
            post_id=view.post_id,
            author_id=view.author.id,
            author_display_name=view.author.display_name,
            author_avatar_url=view.author.avatar_url,
            content=view.content,
            level=view.level,
            likes_count=view.likes_count,
            replies_count=view.replies_count,
            is_liked_by_caller=view.is_liked_by_caller,
            created_at=view.created_at,
        )


@dataclass(frozen=True)
class PendingLike:
    """An in-flight like toggle.

    ``fallback_*`` is the last state the server confirmed; it is what a
    failure of the latest request rolls back to.
    """

    request_seq: int
    fallback_liked: bool
    fallback_likes_count: int


@dataclass(frozen=True)
class ThreadState:
    """Everything the client knows about one post's discussion."""

    post_id: str
    nodes: Mapping[NodeRef, CommentNode] = field(default_factory=dict)
    roots: tuple[NodeRef, ...] = ()
    # Loaded direct children per parent, newest first
    children: Mapping[NodeRef, tuple[NodeRef, ...]] = field(default_factory=dict)
    # Whether "load more" can fetch further replies for a parent
    replies_has_more: Mapping[NodeRef, bool] = field(default_factory=dict)
    page: int = 0
    has_more: bool = False
    total_count: int = 0
    # In-flight like toggles keyed by comment ID
    pending_likes: Mapping[str, PendingLike] = field(default_factory=dict)
    like_seq: int = 0
