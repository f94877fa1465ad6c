"""SQLAlchemy table definitions for Port42.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(30), nullable=False, unique=True),
    Column("email", String(255), nullable=True, unique=True),
    Column("display_name", String(50), nullable=True),
    Column("reputation", Integer, nullable=False, server_default="0"),
    Column("total_upvotes", Integer, nullable=False, server_default="0"),
    Column("total_downvotes", Integer, nullable=False, server_default="0"),
    Column("is_moderator", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("reputation >= 0", name="reputation_non_negative"),
)

# ============================================================================
# COMMUNITIES TABLE
# ============================================================================
communities_table = Table(
    "communities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(50), nullable=False, unique=True),
    Column("slug", String(50), nullable=False, unique=True),
    Column("description", String(500), nullable=False),
    Column("icon", String(16), nullable=False, server_default="🌐"),
    Column("color", String(7), nullable=False, server_default="#00ff41"),
    Column("resource_count", Integer, nullable=False, server_default="0"),
    Column("member_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_by",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# COMMUNITY MEMBERS TABLE
# ============================================================================
community_members_table = Table(
    "community_members",
    metadata,
    Column(
        "community_id",
        UUID,
        ForeignKey("communities.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "joined_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# RESOURCES TABLE
# ============================================================================
resources_table = Table(
    "resources",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(200), nullable=False),
    Column("url", Text, nullable=False, unique=True),
    Column("description", String(1000), nullable=False, server_default=""),
    Column(
        "resource_type",
        postgresql.ENUM(
            "article",
            "video",
            "course",
            "tool",
            "documentation",
            "tutorial",
            "book",
            "podcast",
            "other",
            name="resource_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column(
        "difficulty",
        postgresql.ENUM(
            "beginner",
            "intermediate",
            "advanced",
            "expert",
            name="difficulty",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("tags", ARRAY(String(30)), nullable=False, server_default="{}"),
    Column(
        "community_id",
        UUID,
        ForeignKey("communities.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column(
        "submitted_by", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("submitter_username", String(30), nullable=False),  # Denormalized
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("views", Integer, nullable=False, server_default="0"),
    Column("clicks", Integer, nullable=False, server_default="0"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("is_reported", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "upvotes >= 0 AND downvotes >= 0 AND comment_count >= 0",
        name="resource_counters_non_negative",
    ),
)

Index("idx_resources_community_id", resources_table.c.community_id)
Index("idx_resources_created_at", resources_table.c.created_at.desc())
Index("idx_resources_submitted_by", resources_table.c.submitted_by)

# ============================================================================
# RESOURCE REPORTS TABLE
# ============================================================================
resource_reports_table = Table(
    "resource_reports",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "resource_id",
        UUID,
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "reason",
        postgresql.ENUM(
            "spam",
            "inappropriate",
            "broken-link",
            "duplicate",
            "other",
            name="report_reason",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("description", String(500), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("resource_id", "user_id", name="unique_report"),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "resource_id",
        UUID,
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    # Top-level ancestor; NULL for top-level comments
    Column(
        "root_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_username", String(30), nullable=False),  # Denormalized
    Column("content", Text, nullable=False),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column("edit_history", JSONB, nullable=False, server_default="[]"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("depth >= 0 AND depth <= 5", name="depth_in_range"),
    CheckConstraint(
        "upvotes >= 0 AND downvotes >= 0", name="comment_votes_non_negative"
    ),
)

Index(
    "idx_comments_resource_top_level",
    comments_table.c.resource_id,
    comments_table.c.created_at,
    postgresql_where=comments_table.c.parent_id.is_(None),
)
Index("idx_comments_root_id", comments_table.c.root_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "votable_type",
        postgresql.ENUM(
            "resource", "comment", name="votable_type", create_type=False
        ),
        nullable=False,
    ),
    Column("votable_id", UUID, nullable=False),
    Column(
        "vote_type",
        postgresql.ENUM("up", "down", name="vote_type", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)
