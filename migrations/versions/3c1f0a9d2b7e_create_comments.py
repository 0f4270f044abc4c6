"""create comments

Create the comments table:
- Self-referencing parent_id (NULL for root comments), cascading deletes
- Generated tsvector column over content for full-text search

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2025-11-10 18:04:12.531842

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "comments",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("parent_id", sa.BigInteger(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        # Must use the same configuration as SearchSettings.language
        sa.Column(
            "search_vector",
            postgresql.TSVECTOR(),
            sa.Computed("to_tsvector('russian', content)", persisted=True),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.CheckConstraint("content <> ''", name="content_not_empty"),
    )

    op.create_index(
        "idx_comments_parent_id_created_at",
        "comments",
        ["parent_id", "created_at"],
    )
    op.create_index("idx_comments_created_at", "comments", ["created_at"])
    op.create_index(
        "idx_comments_search_vector",
        "comments",
        ["search_vector"],
        postgresql_using="gin",
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comments_search_vector", table_name="comments")
    op.drop_index("idx_comments_created_at", table_name="comments")
    op.drop_index("idx_comments_parent_id_created_at", table_name="comments")
    op.drop_table("comments")
