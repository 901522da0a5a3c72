"""Toggle like use case."""

from pydantic import BaseModel

from discuss.application.usecase.comment.views import parse_id
from discuss.domain.error import AuthError
from discuss.domain.service import LikeService, SessionResolver
from discuss.domain.value import CommentId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    comment_id: str
    auth_token: str | None = None


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    liked: bool
    likes_count: int


class ToggleLikeUseCase:
    """Use case for liking or unliking a comment.

    Both ``POST`` and ``DELETE`` on the like resource land here: the caller
    only ever asks to flip their membership.
    """

    def __init__(
        self, like_service: LikeService, session_resolver: SessionResolver
    ) -> None:
        """Initialize toggle like use case.

        Args:
            like_service: Like domain service
            session_resolver: Resolves the caller from the session token
        """
        self.like_service = like_service
        self.session_resolver = session_resolver

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Returns:
            The caller's resulting like state and the comment's likes_count

        Raises:
            AuthError: If the caller is not authenticated
            NotFoundError: If the comment does not exist
            ConflictError: If the toggle kept losing races
        """
        caller = await self.session_resolver.resolve(request.auth_token)
        if caller is None:
            raise AuthError("like comments")

        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        state = await self.like_service.toggle_like(comment_id, caller.user_id)

        return ToggleLikeResponse(liked=state.liked, likes_count=state.likes_count)
