"""Repository interfaces for the comment engine.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from discuss.domain.repository.comment import CommentRepository
from discuss.domain.repository.like import LikeRepository

__all__ = [
    "CommentRepository",
    "LikeRepository",
]
