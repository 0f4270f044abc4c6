"""In-memory comment repository for testing."""

import itertools
import re
from typing import List, Optional

from ctree.domain.model.comment import Comment
from ctree.domain.repository.comment import CommentRepository
from ctree.domain.validation import (
    require_comment,
    require_comment_id,
    require_page,
    require_query,
)
from ctree.domain.value import CommentId
from ctree.persistence.error import StoreError

_WORD = re.compile(r"\w+")


def _terms(text: str) -> List[str]:
    return _WORD.findall(text.lower())


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Search matches whole lowercased words (every query word must occur)
    and ranks by the number of occurrences. There is no stemming.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._ids = itertools.count(1)

    async def create(self, comment: Comment) -> Comment:
        """Insert a comment with the next id."""
        comment = require_comment("create", comment)

        # Mirror the foreign key on parent_id
        if comment.parent_id is not None and comment.parent_id not in self._comments:
            raise StoreError("create", f"parent comment {comment.parent_id} not found")

        saved = comment.with_id(CommentId(next(self._ids)))
        self._comments[saved.id] = saved
        return saved

    async def update(self, comment: Comment) -> None:
        """Replace content of an existing comment."""
        comment = require_comment("update", comment)
        comment_id = require_comment_id("update", comment.id)

        existing = self._comments.get(comment_id)
        if existing:
            self._comments[comment_id] = existing.with_content(comment.content)

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and, like ON DELETE CASCADE, its descendants."""
        require_comment_id("delete", comment_id)

        pending = [comment_id]
        while pending:
            current = pending.pop()
            self._comments.pop(current, None)
            pending.extend(
                c.id for c in self._comments.values() if c.parent_id == current
            )

    async def get_by_parent(
        self,
        parent_id: Optional[CommentId],
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Find direct children of parent_id, or roots when None."""
        require_page("get_by_parent", limit, offset)

        if parent_id is not None:
            require_comment_id("get_by_parent", parent_id)

        comments = [c for c in self._comments.values() if c.parent_id == parent_id]

        # Sort by created_at ascending
        comments.sort(key=lambda c: (c.created_at, c.id))

        # Paginate
        return comments[offset : offset + limit]

    async def search(
        self,
        query: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Word-match search ranked by occurrences, newest first on ties."""
        query = require_query("search", query)
        require_page("search", limit, offset)

        wanted = set(_terms(query))
        ranked = []
        for comment in self._comments.values():
            terms = _terms(comment.content)
            if wanted and wanted.issubset(terms):
                rank = sum(1 for term in terms if term in wanted)
                ranked.append((rank, comment))

        ranked.sort(
            key=lambda item: (item[0], item[1].created_at, item[1].id), reverse=True
        )

        return [comment for _, comment in ranked[offset : offset + limit]]
