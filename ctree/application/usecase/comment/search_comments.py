"""Search comments use case."""

from pydantic import BaseModel

from ctree.application.usecase.base import BaseUseCase
from ctree.application.usecase.comment.get_comments import CommentItem
from ctree.domain.service import CommentService


class SearchCommentsRequest(BaseModel):
    """Search comments request."""

    query: str
    limit: int = 10
    offset: int = 0


class SearchCommentsResponse(BaseModel):
    """Search comments response."""

    query: str
    comments: list[CommentItem]
    limit: int
    offset: int


class SearchCommentsUseCase(BaseUseCase):
    """Use case for full-text search over comments."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize search comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: SearchCommentsRequest) -> SearchCommentsResponse:
        """Execute search flow.

        Results are ranked by relevance, newest first on equal rank.

        Args:
            request: Query and page bounds

        Returns:
            One page of matching comments
        """
        comments = await self.comment_service.search(
            request.query, limit=request.limit, offset=request.offset
        )

        return SearchCommentsResponse(
            query=request.query,
            comments=[CommentItem.from_comment(c) for c in comments],
            limit=request.limit,
            offset=request.offset,
        )
