"""List comments use case."""

from pydantic import BaseModel

from discuss.domain.service import LikeService, PaginationService, SessionResolver
from discuss.domain.value import CommentOrder, PostId

from .views import CommentView, PaginationView, parse_id, to_comment_view


class ListCommentsRequest(BaseModel):
    """List comments request."""

    post_id: str  # UUID string
    page: int = 1
    page_size: int | None = None  # Defaults to the configured page size
    order: CommentOrder = CommentOrder.NEWEST
    auth_token: str | None = None  # Optional; fills is_liked_by_caller


class ListCommentsResponse(BaseModel):
    """List comments response."""

    comments: list[CommentView]
    pagination: PaginationView


class ListCommentsUseCase:
    """Use case for listing a page of top-level comments with reply previews."""

    def __init__(
        self,
        pagination_service: PaginationService,
        like_service: LikeService,
        session_resolver: SessionResolver,
    ) -> None:
        """Initialize list comments use case.

        Args:
            pagination_service: Pagination domain service
            like_service: Like service for the caller's like state
            session_resolver: Resolves the optional caller
        """
        self.pagination_service = pagination_service
        self.like_service = like_service
        self.session_resolver = session_resolver

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Args:
            request: List comments request

        Returns:
            Page of root comments, each with its first replies

        Raises:
            ValidationError: If the post ID, page or page size is invalid
        """
        post_id = PostId(parse_id(request.post_id, "post"))
        caller = await self.session_resolver.resolve(request.auth_token)

        page = await self.pagination_service.list_top_level(
            post_id=post_id,
            page=request.page,
            page_size=request.page_size,
            order=request.order,
        )

        # One batch lookup covering the page and every preview
        visible_ids = [comment.id for comment in page.comments]
        for replies in page.replies.values():
            visible_ids.extend(reply.id for reply in replies)
        liked_ids = await self.like_service.liked_comment_ids(
            caller.user_id if caller else None, visible_ids
        )

        return ListCommentsResponse(
            comments=[
                to_comment_view(comment, liked_ids, page.replies.get(comment.id, []))
                for comment in page.comments
            ],
            pagination=PaginationView(
                page=page.page,
                page_size=page.page_size,
                has_more=page.has_more,
                total_count=page.total_count,
            ),
        )
