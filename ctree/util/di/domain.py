"""Domain layer DI providers."""

from dishka import Scope, provide

from ctree.domain.repository import CommentRepository
from ctree.domain.service import CommentService
from ctree.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)
