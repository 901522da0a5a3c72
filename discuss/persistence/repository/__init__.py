"""PostgreSQL repository implementations."""

from discuss.persistence.repository.comment import PostgresCommentRepository
from discuss.persistence.repository.like import PostgresLikeRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresLikeRepository",
]
