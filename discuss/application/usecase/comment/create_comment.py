"""Create comment use case."""

from pydantic import BaseModel

from discuss.domain.error import AuthError
from discuss.domain.service import CommentService, SessionResolver
from discuss.domain.value import CommentId, PostId

from .views import CommentView, parse_id, to_comment_view


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    content: str
    parent_id: str | None = None  # Parent comment ID for replies
    auth_token: str | None = None


class CreateCommentResponse(CommentView):
    """The created comment with zeroed counters."""

    pass


class CreateCommentUseCase:
    """Use case for creating a root comment or a reply."""

    def __init__(
        self, comment_service: CommentService, session_resolver: SessionResolver
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            session_resolver: Resolves the caller from the session token
        """
        self.comment_service = comment_service
        self.session_resolver = session_resolver

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            AuthError: If the caller is not authenticated
            ValidationError: If content or IDs are invalid
            NotFoundError: If the parent does not exist or is on another post
        """
        caller = await self.session_resolver.resolve(request.auth_token)
        if caller is None:
            raise AuthError("create comments")

        post_id = PostId(parse_id(request.post_id, "post"))
        parent_id = (
            CommentId(parse_id(request.parent_id, "parent comment"))
            if request.parent_id is not None
            else None
        )

        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author=caller,
            content=request.content,
            parent_id=parent_id,
        )

        # A new comment has no likes and no replies yet
        view = to_comment_view(comment, liked_ids=set())
        return CreateCommentResponse(**view.model_dump())
