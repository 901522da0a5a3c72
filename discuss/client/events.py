"""Events consumed by the thread reducer."""

from dataclasses import dataclass
from enum import Enum

from discuss.application.usecase.comment.views import CommentView


class Phase(str, Enum):
    """Lifecycle phase of an optimistic mutation."""

    OPTIMISTIC = "optimistic"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(frozen=True)
class CommentDraft:
    """What the client knows about a comment before the server accepts it."""

    post_id: str
    content: str
    parent_id: str | None
    author_id: str
    author_display_name: str
    author_avatar_url: str | None = None


@dataclass(frozen=True)
class PageLoaded:
    """A page of top-level comments arrived. Page 1 replaces the listing."""

    page: int
    comments: tuple[CommentView, ...]
    has_more: bool
    total_count: int


@dataclass(frozen=True)
class RepliesLoaded:
    """A batch of direct replies arrived for ``parent_id``."""

    parent_id: str
    replies: tuple[CommentView, ...]
    has_more: bool


@dataclass(frozen=True)
class CommentCreated:
    """A comment submission moved through a phase.

    ``comment`` carries the canonical server comment when ``CONFIRMED``.
    """

    phase: Phase
    temp_id: str
    draft: CommentDraft
    comment: CommentView | None = None


@dataclass(frozen=True)
class LikeToggled:
    """A like toggle moved through a phase.

    ``liked``/``likes_count`` carry the server answer when ``CONFIRMED``.
    """

    phase: Phase
    comment_id: str
    request_seq: int
    liked: bool | None = None
    likes_count: int | None = None


@dataclass(frozen=True)
class CommentRefreshed:
    """A comment and its reply preview were refetched."""

    comment: CommentView


Event = PageLoaded | RepliesLoaded | CommentCreated | LikeToggled | CommentRefreshed
