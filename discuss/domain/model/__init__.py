"""Domain model entities for the comment engine."""

from discuss.domain.model.comment import MAX_CONTENT_LENGTH, Comment
from discuss.domain.model.like import Like

__all__ = [
    "Comment",
    "Like",
    "MAX_CONTENT_LENGTH",
]
