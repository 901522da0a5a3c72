"""Client reconciler: optimistic mutations against the comments API.

Each mutation goes through the same lifecycle: apply optimistically,
await the server, then reconcile on success or roll back on failure. Any
failure, including timeouts and cancellation, is re-raised after the
rollback so the caller can react.
"""

import asyncio
import itertools

import logfire

from discuss.application.usecase.comment import CommentView
from discuss.application.usecase.like import ToggleLikeResponse
from discuss.domain.error import AuthError, NotFoundError, ValidationError
from discuss.domain.model.comment import MAX_CONTENT_LENGTH
from discuss.domain.service.comment_service import normalize_content
from discuss.domain.value import Caller, CommentOrder

from .api import CommentsApi
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
from .reducer import apply
from .refs import Committed, NodeRef, Pending
from .state import ThreadState
from .view import RenderedComment, render


class ThreadReconciler:
    """Keeps one post's thread state in sync with the server."""

    def __init__(
        self,
        api: CommentsApi,
        post_id: str,
        caller: Caller | None = None,
        max_content_length: int = MAX_CONTENT_LENGTH,
    ) -> None:
        """Initialize reconciler.

        Args:
            api: Transport to the comments API
            post_id: Post whose discussion is shown
            caller: Signed-in user (None for read-only sessions)
            max_content_length: Local content limit, mirroring the server's
        """
        self.api = api
        self.caller = caller
        self.max_content_length = max_content_length
        self.state = ThreadState(post_id=post_id)
        self._temp_ids = itertools.count(1)
        self._order = CommentOrder.NEWEST

    def dispatch(self, event: Event) -> ThreadState:
        """Run an event through the reducer and keep the result."""
        self.state = apply(self.state, event)
        return self.state

    def render(self) -> list[RenderedComment]:
        """Nested tree for presentation."""
        return render(self.state)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def load_page(
        self,
        page: int = 1,
        page_size: int | None = None,
        order: CommentOrder = CommentOrder.NEWEST,
    ) -> ThreadState:
        """Fetch a page of top-level comments. Page 1 replaces the listing."""
        self._order = order
        response = await self.api.list_comments(
            self.state.post_id, page=page, page_size=page_size, order=order
        )
        return self.dispatch(
            PageLoaded(
                page=response.pagination.page,
                comments=tuple(response.comments),
                has_more=response.pagination.has_more,
                total_count=response.pagination.total_count,
            )
        )

    async def load_next_page(self) -> ThreadState:
        """Fetch the page after the last one loaded, if there is one."""
        if self.state.page and not self.state.has_more:
            return self.state
        return await self.load_page(page=self.state.page + 1, order=self._order)

    async def load_more_replies(self, comment_id: str) -> ThreadState:
        """Fetch the next batch of replies after the oldest one loaded."""
        loaded = self.state.children.get(Committed(comment_id), ())
        committed = [ref.comment_id for ref in loaded if isinstance(ref, Committed)]
        after_id = committed[-1] if committed else None

        response = await self.api.load_replies(comment_id, after_id)
        return self.dispatch(
            RepliesLoaded(
                parent_id=comment_id,
                replies=tuple(response.replies),
                has_more=response.has_more,
            )
        )

    async def refresh_comment(self, comment_id: str) -> ThreadState:
        """Refetch a comment's canonical counters and reply preview."""
        view = await self.api.get_comment(comment_id)
        return self.dispatch(CommentRefreshed(comment=view))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def submit_comment(
        self, content: str, parent: NodeRef | None = None
    ) -> CommentView:
        """Post a comment or reply optimistically.

        Args:
            content: Comment text
            parent: Node being replied to (None for a root comment)

        Returns:
            The canonical comment from the server

        Raises:
            AuthError: If there is no signed-in caller
            ValidationError: If content is invalid or the parent is still pending
            NotFoundError: If the parent is not loaded
        """
        if self.caller is None:
            raise AuthError("create comments")

        text = normalize_content(content, self.max_content_length)

        parent_id: str | None = None
        match parent:
            case None:
                pass
            case Pending():
                raise ValidationError(
                    "Cannot reply to a comment that has not been posted yet"
                )
            case Committed(comment_id=comment_id):
                if parent not in self.state.nodes:
                    raise NotFoundError("Parent comment", comment_id)
                parent_id = comment_id

        temp_id = f"tmp-{next(self._temp_ids)}"
        draft = CommentDraft(
            post_id=self.state.post_id,
            content=text,
            parent_id=parent_id,
            author_id=str(self.caller.user_id),
            author_display_name=self.caller.display_name.root,
            author_avatar_url=self.caller.avatar_url,
        )
        self.dispatch(CommentCreated(Phase.OPTIMISTIC, temp_id, draft))

        try:
            created = await self.api.create_comment(
                self.state.post_id, text, parent_id
            )
        except (Exception, asyncio.CancelledError) as e:
            self.dispatch(CommentCreated(Phase.FAILED, temp_id, draft))
            logfire.warn(
                "Comment submission rolled back", temp_id=temp_id, error=repr(e)
            )
            raise

        self.dispatch(CommentCreated(Phase.CONFIRMED, temp_id, draft, created))

        if parent_id is not None:
            # The parent's counters and preview changed on the server
            await self.refresh_comment(parent_id)

        return created

    async def toggle_like(self, comment_id: str) -> ToggleLikeResponse:
        """Toggle the caller's like optimistically.

        Rapid toggles each get a higher request sequence; only the latest
        one decides what is displayed.

        Raises:
            AuthError: If there is no signed-in caller
            NotFoundError: If the comment is not loaded
        """
        if self.caller is None:
            raise AuthError("like comments")

        node = self.state.nodes.get(Committed(comment_id))
        if node is None:
            raise NotFoundError("Comment", comment_id)

        seq = self.state.like_seq + 1
        expected = not node.is_liked_by_caller
        self.dispatch(LikeToggled(Phase.OPTIMISTIC, comment_id, seq))

        try:
            result = await self.api.toggle_like(comment_id, liked=expected)
        except (Exception, asyncio.CancelledError) as e:
            pending = self.state.pending_likes.get(comment_id)
            if pending is not None and pending.request_seq > seq:
                logfire.warn(
                    "Superseded like toggle failed",
                    comment_id=comment_id,
                    request_seq=seq,
                    error=repr(e),
                )
            self.dispatch(LikeToggled(Phase.FAILED, comment_id, seq))
            raise

        self.dispatch(
            LikeToggled(
                Phase.CONFIRMED,
                comment_id,
                seq,
                liked=result.liked,
                likes_count=result.likes_count,
            )
        )
        return result
