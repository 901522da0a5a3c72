"""Domain services."""

from .base import Service
from .comment_service import CommentService, normalize_content
from .like_service import LikeService
from .pagination_service import CommentPage, PaginationService, ReplyBatch
from .session import SessionResolver

__all__ = [
    "CommentPage",
    "CommentService",
    "LikeService",
    "PaginationService",
    "ReplyBatch",
    "Service",
    "SessionResolver",
    "normalize_content",
]
