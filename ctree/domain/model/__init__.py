"""Domain model entities."""

from ctree.domain.model.comment import Comment

__all__ = [
    "Comment",
]
