"""Get comment use case."""

from pydantic import BaseModel

from discuss.domain.service import CommentService, LikeService, SessionResolver
from discuss.domain.value import CommentId

from .views import CommentView, parse_id, to_comment_view


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str
    auth_token: str | None = None


class GetCommentResponse(CommentView):
    """A single comment with its reply preview."""

    pass


class GetCommentUseCase:
    """Use case for fetching one comment subtree head.

    Clients call this after a reply succeeds to pick up the parent's
    canonical counters and preview.
    """

    def __init__(
        self,
        comment_service: CommentService,
        like_service: LikeService,
        session_resolver: SessionResolver,
    ) -> None:
        self.comment_service = comment_service
        self.like_service = like_service
        self.session_resolver = session_resolver

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        """Execute get comment flow.

        Raises:
            ValidationError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        caller = await self.session_resolver.resolve(request.auth_token)

        comment = await self.comment_service.get_comment(comment_id)
        previews = await self.comment_service.get_reply_previews([comment.id])
        replies = previews.get(comment.id, [])

        liked_ids = await self.like_service.liked_comment_ids(
            caller.user_id if caller else None,
            [comment.id, *(reply.id for reply in replies)],
        )

        view = to_comment_view(comment, liked_ids, replies)
        return GetCommentResponse(**view.model_dump())
