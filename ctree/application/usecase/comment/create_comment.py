"""Create comment use case."""

from pydantic import BaseModel

from ctree.application.usecase.base import BaseUseCase
from ctree.application.usecase.comment.get_comments import CommentItem
from ctree.domain.service import CommentService
from ctree.domain.value import CommentId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content: str
    parent_id: int | None = None  # Parent comment ID for replies


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a root comment or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment with its assigned id

        Raises:
            ValidationError: If content is empty or parent_id is invalid
            StoreError: If the parent comment does not exist
        """
        parent_id = (
            CommentId(request.parent_id) if request.parent_id is not None else None
        )

        comment = await self.comment_service.create_comment(
            content=request.content, parent_id=parent_id
        )
        return CommentItem.from_comment(comment)
