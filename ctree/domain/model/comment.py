"""Comment entity.

Comments form a tree through ``parent_id``. A comment without a parent is
a root comment. Parents are assigned once at creation and never change,
so the hierarchy cannot contain cycles.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from ctree.domain.model.common import DomainModel
from ctree.domain.value import MAX_COMMENT_ID, CommentId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Comment(DomainModel):
    """Comment entity.

    - id: Assigned by the store on creation (None until persisted)
    - parent_id: Direct parent comment (None for root comments)
    - content: Comment text, the only field that can be updated
    - created_at: Creation timestamp, used for ordering
    """

    id: Optional[CommentId] = Field(default=None, gt=0, le=MAX_COMMENT_ID)
    parent_id: Optional[CommentId] = Field(default=None, gt=0, le=MAX_COMMENT_ID)
    content: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_root(self) -> bool:
        """Whether this comment starts a new thread."""
        return self.parent_id is None

    def with_id(self, comment_id: CommentId) -> "Comment":
        """Return a copy carrying the identifier assigned by the store."""
        return self.model_copy(update={"id": comment_id})

    def with_content(self, content: str) -> "Comment":
        """Return a copy with new content, validated like a fresh comment."""
        return Comment(
            id=self.id,
            parent_id=self.parent_id,
            content=content,
            created_at=self.created_at,
        )
