"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

import logfire

from ctree.domain.model import Comment
from ctree.domain.repository import CommentRepository
from ctree.domain.validation import (
    require_comment,
    require_comment_id,
    require_page,
    require_query,
)
from ctree.domain.value import CommentId
from ctree.persistence.error import StoreError
from ctree.persistence.executor import ResilientExecutor
from ctree.persistence.mappers import row_to_comment
from ctree.persistence.statements import CommentStatementBuilder


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Composes the statement builder and the resilient executor. Arguments
    are validated before any statement is built.
    """

    def __init__(
        self, executor: ResilientExecutor, builder: CommentStatementBuilder
    ) -> None:
        """Initialize repository.

        Args:
            executor: Runs statements with retry
            builder: Builds statements for the comments table
        """
        self.executor = executor
        self.builder = builder

    async def create(self, comment: Comment) -> Comment:
        """Insert a comment and return it with its generated id."""
        comment = require_comment("create", comment)

        statement = self.builder.build_insert(comment)
        row = await self.executor.fetch_one(statement)
        if row is None:
            raise StoreError("create", "insert returned no id")

        return comment.with_id(CommentId(row["id"]))

    async def update(self, comment: Comment) -> None:
        """Update the content of a comment."""
        comment = require_comment("update", comment)
        require_comment_id("update", comment.id)

        statement = self.builder.build_update(comment)
        affected = await self.executor.execute(statement)
        if affected == 0:
            logfire.debug("Update matched no comment", comment_id=comment.id)

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete)."""
        require_comment_id("delete", comment_id)

        statement = self.builder.build_delete(comment_id)
        affected = await self.executor.execute(statement)
        if affected == 0:
            logfire.debug("Delete matched no comment", comment_id=comment_id)

    async def get_by_parent(
        self,
        parent_id: Optional[CommentId],
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """List direct children of a comment, or root comments."""
        require_page("get_by_parent", limit, offset)
        if parent_id is not None:
            require_comment_id("get_by_parent", parent_id)

        statement = self.builder.build_list_by_parent(parent_id, limit, offset)
        rows = await self.executor.fetch_all(statement)
        return [row_to_comment(row) for row in rows]

    async def search(
        self,
        query: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Full-text search ranked by relevance."""
        query = require_query("search", query)
        require_page("search", limit, offset)

        statement = self.builder.build_search(query, limit, offset)
        rows = await self.executor.fetch_all(statement)
        return [row_to_comment(row) for row in rows]
