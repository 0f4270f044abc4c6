"""Delete comment use case."""

from pydantic import BaseModel

from ctree.application.usecase.base import BaseUseCase
from ctree.domain.service import CommentService
from ctree.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment together with its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        await self.comment_service.delete_comment(CommentId(request.comment_id))
