"""Load more replies use case."""

from pydantic import BaseModel

from discuss.domain.service import LikeService, PaginationService, SessionResolver
from discuss.domain.value import CommentId

from .views import CommentView, parse_id, to_comment_view


class LoadRepliesRequest(BaseModel):
    """Load replies request."""

    comment_id: str
    after_id: str | None = None  # Last reply the client already shows
    auth_token: str | None = None


class LoadRepliesResponse(BaseModel):
    """Load replies response."""

    replies: list[CommentView]
    has_more: bool


class LoadRepliesUseCase:
    """Use case for expanding a comment's replies batch by batch."""

    def __init__(
        self,
        pagination_service: PaginationService,
        like_service: LikeService,
        session_resolver: SessionResolver,
    ) -> None:
        self.pagination_service = pagination_service
        self.like_service = like_service
        self.session_resolver = session_resolver

    async def execute(self, request: LoadRepliesRequest) -> LoadRepliesResponse:
        """Execute load replies flow.

        Raises:
            ValidationError: If an ID is malformed or the cursor is not a reply
            NotFoundError: If the comment or cursor does not exist
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        after_id = (
            CommentId(parse_id(request.after_id, "cursor comment"))
            if request.after_id is not None
            else None
        )
        caller = await self.session_resolver.resolve(request.auth_token)

        batch = await self.pagination_service.load_more_replies(comment_id, after_id)
        liked_ids = await self.like_service.liked_comment_ids(
            caller.user_id if caller else None, [reply.id for reply in batch.replies]
        )

        return LoadRepliesResponse(
            replies=[to_comment_view(reply, liked_ids) for reply in batch.replies],
            has_more=batch.has_more,
        )
