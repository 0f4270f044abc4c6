"""Comment domain service."""

from typing import Optional

import logfire

from ctree.domain.model.comment import Comment
from ctree.domain.repository import CommentRepository
from ctree.domain.validation import make_comment
from ctree.domain.value import CommentId

from .base import Service


class CommentService(Service):
    """Domain service for comment operations.

    Thin layer over the repository: every failure is logged with its
    context and re-raised unchanged for the caller to map.
    """

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self, content: str, parent_id: Optional[CommentId] = None
    ) -> Comment:
        """Create a root comment or a reply.

        Args:
            content: Comment text
            parent_id: Parent comment ID for replies (None for root)

        Returns:
            Created comment with its assigned id
        """
        with logfire.span(
            "comment_service.create_comment",
            parent_id=parent_id,
            content_length=len(content),
        ):
            try:
                comment = make_comment("create", content=content, parent_id=parent_id)
                saved = await self.comment_repository.create(comment)
            except Exception as e:
                logfire.error(
                    "Failed to create comment", parent_id=parent_id, error=str(e)
                )
                raise

            logfire.info("Comment created", comment_id=saved.id, parent_id=parent_id)
            return saved

    async def update_content(self, comment_id: CommentId, content: str) -> Comment:
        """Replace the content of a comment.

        Args:
            comment_id: Comment ID
            content: New text content

        Returns:
            The comment id with its new content (other fields are not read back)
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=comment_id,
            content_length=len(content),
        ):
            try:
                comment = make_comment("update", id=comment_id, content=content)
                await self.comment_repository.update(comment)
            except Exception as e:
                logfire.error(
                    "Failed to update comment", comment_id=comment_id, error=str(e)
                )
                raise

            logfire.info("Comment updated", comment_id=comment_id)
            return comment

    async def delete_comment(self, comment_id: CommentId) -> None:
        """Delete a comment.

        Args:
            comment_id: Comment ID
        """
        with logfire.span("comment_service.delete_comment", comment_id=comment_id):
            try:
                await self.comment_repository.delete(comment_id)
            except Exception as e:
                logfire.error(
                    "Failed to delete comment", comment_id=comment_id, error=str(e)
                )
                raise

            logfire.info("Comment deleted", comment_id=comment_id)

    async def get_children(
        self, parent_id: Optional[CommentId], limit: int, offset: int
    ) -> list[Comment]:
        """Get one page of direct children, or root comments when parent_id is None."""
        with logfire.span(
            "comment_service.get_children",
            parent_id=parent_id,
            limit=limit,
            offset=offset,
        ):
            try:
                comments = await self.comment_repository.get_by_parent(
                    parent_id, limit=limit, offset=offset
                )
            except Exception as e:
                logfire.error(
                    "Failed to get comments", parent_id=parent_id, error=str(e)
                )
                raise

            logfire.info(
                "Comments retrieved", parent_id=parent_id, count=len(comments)
            )
            return comments

    async def search(self, query: str, limit: int, offset: int) -> list[Comment]:
        """Full-text search over comment content."""
        with logfire.span(
            "comment_service.search", query=query, limit=limit, offset=offset
        ):
            try:
                comments = await self.comment_repository.search(
                    query, limit=limit, offset=offset
                )
            except Exception as e:
                logfire.error("Failed to search comments", query=query, error=str(e))
                raise

            logfire.info("Comments searched", query=query, count=len(comments))
            return comments
