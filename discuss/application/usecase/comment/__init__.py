"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .get_comment import GetCommentRequest, GetCommentResponse, GetCommentUseCase
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .load_replies import LoadRepliesRequest, LoadRepliesResponse, LoadRepliesUseCase
from .views import AuthorView, CommentView, PaginationView

__all__ = [
    "AuthorView",
    "CommentView",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "GetCommentRequest",
    "GetCommentResponse",
    "GetCommentUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "LoadRepliesRequest",
    "LoadRepliesResponse",
    "LoadRepliesUseCase",
    "PaginationView",
]
