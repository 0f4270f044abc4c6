"""Argument checks shared by every comment repository.

These run before any statement is built, so an invalid call never reaches
the database.
"""

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from ctree.domain.error import ValidationError
from ctree.domain.model.comment import Comment
from ctree.domain.value import MAX_COMMENT_ID, CommentId

# LIMIT and OFFSET are bound as BIGINT
MAX_PAGE_BOUND = 2**63 - 1


def require_comment(operation: str, comment: Optional[Comment]) -> Comment:
    if comment is None:
        raise ValidationError(operation, "comment is required")
    return comment


def require_comment_id(operation: str, comment_id: Optional[CommentId]) -> CommentId:
    # Anything outside the identity column range cannot name a comment
    if comment_id is None or not 0 < comment_id <= MAX_COMMENT_ID:
        raise ValidationError(operation, f"invalid comment id: {comment_id!r}")
    return comment_id


def require_page(operation: str, limit: int, offset: int) -> None:
    if not 0 <= limit <= MAX_PAGE_BOUND:
        raise ValidationError(operation, f"limit out of range, got {limit}")
    if not 0 <= offset <= MAX_PAGE_BOUND:
        raise ValidationError(operation, f"offset out of range, got {offset}")


def require_query(operation: str, query: Optional[str]) -> str:
    """Return the stripped query, rejecting empty or blank input."""
    if query is None or not query.strip():
        raise ValidationError(operation, "search query is required")
    return query.strip()


def make_comment(operation: str, **fields: Any) -> Comment:
    """Build a Comment, reporting invalid fields as a ValidationError."""
    try:
        return Comment(**fields)
    except PydanticValidationError as e:
        raise ValidationError(operation, str(e)) from e
