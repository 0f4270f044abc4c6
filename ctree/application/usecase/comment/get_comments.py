"""Get comments use case."""

from datetime import datetime

from pydantic import BaseModel

from ctree.application.usecase.base import BaseUseCase
from ctree.domain.model import Comment
from ctree.domain.service import CommentService
from ctree.domain.value import CommentId


class CommentItem(BaseModel):
    """Comment item in response."""

    id: int
    parent_id: int | None
    content: str
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        """Build response item from a persisted comment."""
        return cls(
            id=comment.id,
            parent_id=comment.parent_id,
            content=comment.content,
            created_at=comment.created_at,
        )


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    parent_id: int | None = None  # None lists root comments
    limit: int = 10
    offset: int = 0


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    parent_id: int | None
    comments: list[CommentItem]
    limit: int
    offset: int


class GetCommentsUseCase(BaseUseCase):
    """Use case for listing the direct children of a comment, or the roots."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Comments are returned oldest first.

        Args:
            request: Parent ID and page bounds

        Returns:
            One page of comments
        """
        parent_id = (
            CommentId(request.parent_id) if request.parent_id is not None else None
        )

        comments = await self.comment_service.get_children(
            parent_id, limit=request.limit, offset=request.offset
        )

        return GetCommentsResponse(
            parent_id=request.parent_id,
            comments=[CommentItem.from_comment(c) for c in comments],
            limit=request.limit,
            offset=request.offset,
        )
