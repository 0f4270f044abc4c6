"""Domain value objects."""

from ctree.domain.value.identifiers import MAX_COMMENT_ID, CommentId

__all__ = [
    "CommentId",
    "MAX_COMMENT_ID",
]
