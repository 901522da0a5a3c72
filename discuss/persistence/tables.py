"""SQLAlchemy table definitions for the comment engine.

These table definitions are used by the hand-written mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    # Owned by the post service; opaque here, so no foreign key
    Column("post_id", UUID(as_uuid=True), nullable=False),
    Column(
        "parent_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("author_id", UUID(as_uuid=True), nullable=False),
    Column("author_display_name", String(255), nullable=False),  # Denormalized
    Column("author_avatar_url", Text, nullable=True),  # Denormalized
    Column("content", Text, nullable=False),
    Column("level", Integer, nullable=False, server_default="0"),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("replies_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="clock_timestamp()",
    ),
    CheckConstraint("level >= 0", name="level_non_negative"),
    CheckConstraint("likes_count >= 0", name="likes_count_non_negative"),
    CheckConstraint("replies_count >= 0", name="replies_count_non_negative"),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 1000", name="content_length"
    ),
)

Index(
    "idx_comments_post_parent_created",
    comments_table.c.post_id,
    comments_table.c.parent_id,
    comments_table.c.created_at.desc(),
    comments_table.c.id.desc(),
)
Index(
    "idx_comments_parent_created",
    comments_table.c.parent_id,
    comments_table.c.created_at.desc(),
    comments_table.c.id.desc(),
)

# ============================================================================
# COMMENT LIKES TABLE
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column(
        "comment_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("user_id", UUID(as_uuid=True), primary_key=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comment_likes_user_id", comment_likes_table.c.user_id)
