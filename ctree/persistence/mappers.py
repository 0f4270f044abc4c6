"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Mapping

from ctree.domain.model import Comment
from ctree.domain.value import CommentId


def row_to_comment(row: Mapping[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as a mapping

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(row["id"]),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        content=row["content"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to insertable column values.

    The id is left out since it is generated by the database.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    return comment.model_dump(include={"parent_id", "content", "created_at"})
