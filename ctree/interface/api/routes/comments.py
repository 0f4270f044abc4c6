"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from ctree.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    SearchCommentsRequest,
    SearchCommentsResponse,
    SearchCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from ctree.domain.value import MAX_COMMENT_ID
from ctree.interface.error import http_errors

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)

MAX_LIMIT = 100


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    # Parent comment ID for replies
    parent_id: int | None = Field(default=None, gt=0, le=MAX_COMMENT_ID)


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    content: str = Field(min_length=1, max_length=10000)


def _validate_page(limit: int, offset: int) -> None:
    if limit < 1 or limit > MAX_LIMIT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Limit must be between 1 and {MAX_LIMIT}",
        )
    if offset < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Offset must be non-negative",
        )


def _parse_parent(parent: str | None) -> int | None:
    """Parse the parent query parameter, empty or "null" meaning root."""
    if parent is None or parent in ("", "null"):
        return None
    try:
        parent_id = int(parent)
    except ValueError:
        parent_id = 0
    if not 0 < parent_id <= MAX_COMMENT_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid parent id",
        )
    return parent_id


@router.post("", response_model=CommentItem, status_code=status.HTTP_201_CREATED)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CommentItem:
    """Create a root comment or a reply to another comment.

    Args:
        request: Comment content and optional parent ID
        create_comment_use_case: Create comment use case from DI

    Returns:
        Created comment with its id
    """
    with http_errors("create comment"):
        return await create_comment_use_case.execute(
            CreateCommentRequest(content=request.content, parent_id=request.parent_id)
        )


@router.patch("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: int,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
) -> UpdateCommentResponse:
    """Update a comment's content.

    Args:
        comment_id: Comment ID
        request: New content
        update_comment_use_case: Update comment use case from DI

    Returns:
        Comment ID and new content
    """
    with http_errors("update comment"):
        return await update_comment_use_case.execute(
            UpdateCommentRequest(comment_id=comment_id, content=request.content)
        )


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> Response:
    """Delete a comment and its replies.

    Deleting a comment that does not exist is not an error.
    """
    with http_errors("delete comment"):
        await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id)
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=GetCommentsResponse)
async def get_comments(
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    parent: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> GetCommentsResponse:
    """List direct replies of a comment, oldest first.

    Args:
        get_comments_use_case: Get comments use case from DI
        parent: Parent comment ID; omitted, empty or "null" lists root comments
        limit: Maximum number of comments to return (1-100)
        offset: Number of comments to skip

    Returns:
        One page of comments
    """
    parent_id = _parse_parent(parent)
    _validate_page(limit, offset)

    with http_errors("get comments"):
        return await get_comments_use_case.execute(
            GetCommentsRequest(parent_id=parent_id, limit=limit, offset=offset)
        )


@router.get("/search", response_model=SearchCommentsResponse)
async def search_comments(
    search_comments_use_case: FromDishka[SearchCommentsUseCase],
    query: str = "",
    limit: int = 10,
    offset: int = 0,
) -> SearchCommentsResponse:
    """Full-text search over comments, most relevant first.

    Args:
        search_comments_use_case: Search comments use case from DI
        query: Search phrase (required)
        limit: Maximum number of comments to return (1-100)
        offset: Number of comments to skip

    Returns:
        One page of matching comments
    """
    _validate_page(limit, offset)

    with http_errors("search comments"):
        return await search_comments_use_case.execute(
            SearchCommentsRequest(query=query, limit=limit, offset=offset)
        )
