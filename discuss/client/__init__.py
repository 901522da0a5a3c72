"""Client-side reconciliation of optimistic comment and like mutations."""

from .api import CommentsApi, HttpCommentsApi
from .error import ClientError, TransportError, UnexpectedResponseError
from .events import (
    CommentCreated,
    CommentDraft,
    CommentRefreshed,
    Event,
    LikeToggled,
    PageLoaded,
    Phase,
    RepliesLoaded,
)
from .reconciler import ThreadReconciler
from .reducer import apply
from .refs import Committed, NodeRef, Pending
from .state import CommentNode, PendingLike, ThreadState
from .view import RenderedComment, render

__all__ = [
    "ClientError",
    "CommentCreated",
    "CommentDraft",
    "CommentNode",
    "CommentRefreshed",
    "CommentsApi",
    "Committed",
    "Event",
    "HttpCommentsApi",
    "LikeToggled",
    "NodeRef",
    "PageLoaded",
    "Pending",
    "PendingLike",
    "Phase",
    "RenderedComment",
    "RepliesLoaded",
    "ThreadReconciler",
    "ThreadState",
    "TransportError",
    "UnexpectedResponseError",
    "apply",
    "render",
]
