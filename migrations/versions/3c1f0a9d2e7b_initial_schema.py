"""initial_schema

Create the schema for threaded discussions:
- Comments (adjacency list with derived level and cached counters)
- Comment likes (membership rows keyed by comment and user)

Revision ID: 3c1f0a9d2e7b
Revises:
Create Date: 2026-10-17 10:12:04.512330

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2e7b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_display_name", sa.String(length=255), nullable=False),
        sa.Column("author_avatar_url", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("level", sa.Integer(), server_default="0", nullable=False),
        sa.Column("likes_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("replies_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("clock_timestamp()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("level >= 0", name="level_non_negative"),
        sa.CheckConstraint("likes_count >= 0", name="likes_count_non_negative"),
        sa.CheckConstraint("replies_count >= 0", name="replies_count_non_negative"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 1000", name="content_length"
        ),
    )

    # Serves top-level pages and reply windows in NEWEST order
    op.execute("""
        CREATE INDEX idx_comments_post_parent_created
        ON comments(post_id, parent_id, created_at DESC, id DESC)
    """)

    # Serves reply previews and cursor expansion, which filter on parent only
    op.execute("""
        CREATE INDEX idx_comments_parent_created
        ON comments(parent_id, created_at DESC, id DESC)
    """)

    # ========================================================================
    # COMMENT_LIKES table
    # ========================================================================
    op.create_table(
        "comment_likes",
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("comment_id", "user_id"),
    )
    op.create_index("idx_comment_likes_user_id", "comment_likes", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comment_likes_user_id", table_name="comment_likes")
    op.drop_table("comment_likes")
    op.execute("DROP INDEX IF EXISTS idx_comments_parent_created")
    op.execute("DROP INDEX IF EXISTS idx_comments_post_parent_created")
    op.drop_table("comments")
