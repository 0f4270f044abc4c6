"""SQLAlchemy table definitions for the comment tree.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Computed,
    ForeignKey,
    Identity,
    Index,
    MetaData,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, TSVECTOR

# Text search configuration baked into the generated search_vector column.
# SearchSettings.language must name the same configuration.
SEARCH_CONFIG = "russian"

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column(
        "parent_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("content", Text, nullable=False),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    ),
    # Maintained by PostgreSQL, never written by the application
    Column(
        "search_vector",
        TSVECTOR,
        Computed(f"to_tsvector('{SEARCH_CONFIG}', content)", persisted=True),
    ),
    CheckConstraint("content <> ''", name="content_not_empty"),
)

Index(
    "idx_comments_parent_id_created_at",
    comments_table.c.parent_id,
    comments_table.c.created_at,
)
Index("idx_comments_created_at", comments_table.c.created_at)
Index(
    "idx_comments_search_vector",
    comments_table.c.search_vector,
    postgresql_using="gin",
)

# Columns of the logical Comment record (search_vector is excluded)
COMMENT_COLUMNS = (
    comments_table.c.id,
    comments_table.c.parent_id,
    comments_table.c.content,
    comments_table.c.created_at,
)
