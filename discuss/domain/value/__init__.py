"""Domain value objects for the comment engine."""

from discuss.domain.value.identifiers import CommentId, PostId, UserId
from discuss.domain.value.types import Caller, CommentOrder, DisplayName, LikeState

__all__ = [
    # Identifiers
    "CommentId",
    "PostId",
    "UserId",
    # Types
    "Caller",
    "CommentOrder",
    "DisplayName",
    "LikeState",
]
