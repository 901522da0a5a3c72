"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import CommentSettings
from discuss.domain.repository import CommentRepository, LikeRepository
from discuss.domain.service import CommentService, LikeService, PaginationService
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository, settings=settings)

    @provide
    def get_like_service(
        self,
        like_repository: LikeRepository,
        comment_service: CommentService,
        settings: CommentSettings,
    ) -> LikeService:
        """Provide like ledger domain service."""
        return LikeService(
            like_repository=like_repository,
            comment_service=comment_service,
            settings=settings,
        )

    @provide
    def get_pagination_service(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> PaginationService:
        """Provide pagination domain service."""
        return PaginationService(comment_service=comment_service, settings=settings)
