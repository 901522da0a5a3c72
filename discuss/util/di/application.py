"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentUseCase,
    ListCommentsUseCase,
    LoadRepliesUseCase,
)
from discuss.application.usecase.like import ToggleLikeUseCase
from discuss.domain.service import (
    CommentService,
    LikeService,
    PaginationService,
    SessionResolver,
)
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, session_resolver: SessionResolver
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, session_resolver=session_resolver
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self,
        comment_service: CommentService,
        like_service: LikeService,
        session_resolver: SessionResolver,
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(
            comment_service=comment_service,
            like_service=like_service,
            session_resolver=session_resolver,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self,
        pagination_service: PaginationService,
        like_service: LikeService,
        session_resolver: SessionResolver,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            pagination_service=pagination_service,
            like_service=like_service,
            session_resolver=session_resolver,
        )

    @provide(scope=Scope.REQUEST)
    def get_load_replies_use_case(
        self,
        pagination_service: PaginationService,
        like_service: LikeService,
        session_resolver: SessionResolver,
    ) -> LoadRepliesUseCase:
        """Provide load replies use case."""
        return LoadRepliesUseCase(
            pagination_service=pagination_service,
            like_service=like_service,
            session_resolver=session_resolver,
        )

    # Like use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, like_service: LikeService, session_resolver: SessionResolver
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(
            like_service=like_service, session_resolver=session_resolver
        )
