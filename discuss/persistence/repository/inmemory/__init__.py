"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .like import InMemoryLikeRepository
from .store import InMemoryCommentStore

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommentStore",
    "InMemoryLikeRepository",
]
