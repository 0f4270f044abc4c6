"""PostgreSQL repository implementations."""

from ctree.persistence.repository.comment import PostgresCommentRepository

__all__ = [
    "PostgresCommentRepository",
]
