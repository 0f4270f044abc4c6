"""Update comment use case."""

from pydantic import BaseModel

from ctree.application.usecase.base import BaseUseCase
from ctree.domain.service import CommentService
from ctree.domain.value import CommentId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: int
    content: str


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    id: int
    content: str


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing the content of a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        A missing comment is not reported: the update simply matches no row.

        Args:
            request: Comment ID and new content

        Returns:
            Comment ID and the content that was written
        """
        comment = await self.comment_service.update_content(
            CommentId(request.comment_id), request.content
        )
        return UpdateCommentResponse(id=comment.id, content=comment.content)
