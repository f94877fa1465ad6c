"""initial_schema

Create the foundational schema for Port42:
- Users (reputation and vote totals)
- Communities (topic hubs resources are filed under)
- Resources (shared links with denormalized vote/comment counters)
- Resource reports (one moderation flag per user per resource)
- Comments (threaded, depth capped at 5, root_id for one-query thread loads)
- Votes (up/down, one record per user per entity)

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-17 09:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUMS = {
    "resource_type": (
        "article",
        "video",
        "course",
        "tool",
        "documentation",
        "tutorial",
        "book",
        "podcast",
        "other",
    ),
    "difficulty": ("beginner", "intermediate", "advanced", "expert"),
    "report_reason": ("spam", "inappropriate", "broken-link", "duplicate", "other"),
    "votable_type": ("resource", "comment"),
    "vote_type": ("up", "down"),
}


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUMS.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("display_name", sa.String(50), nullable=True),
        sa.Column("reputation", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "total_downvotes", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "is_moderator", sa.Boolean(), nullable=False, server_default="false"
        ),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="users_username_key"),
        sa.UniqueConstraint("email", name="users_email_key"),
        sa.CheckConstraint("reputation >= 0", name="reputation_non_negative"),
    )

    # ========================================================================
    # COMMUNITIES table
    # ========================================================================
    op.create_table(
        "communities",
        _id_column(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("slug", sa.String(50), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("icon", sa.String(16), nullable=False, server_default="🌐"),
        sa.Column("color", sa.String(7), nullable=False, server_default="#00ff41"),
        sa.Column("resource_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="communities_name_key"),
        sa.UniqueConstraint("slug", name="communities_slug_key"),
    )

    # ========================================================================
    # RESOURCES table
    # ========================================================================
    op.create_table(
        "resources",
        _id_column(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("description", sa.String(1000), nullable=False, server_default=""),
        sa.Column(
            "resource_type",
            postgresql.ENUM(name="resource_type", create_type=False),
            nullable=False,
        ),
        sa.Column(
            "difficulty",
            postgresql.ENUM(name="difficulty", create_type=False),
            nullable=False,
        ),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(30)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("submitted_by", sa.UUID(), nullable=False),
        sa.Column("submitter_username", sa.String(30), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("clicks", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "is_reported", sa.Boolean(), nullable=False, server_default="false"
        ),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(
            ["community_id"], ["communities.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["submitted_by"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("url", name="resources_url_key"),
        sa.CheckConstraint(
            "upvotes >= 0 AND downvotes >= 0 AND comment_count >= 0",
            name="resource_counters_non_negative",
        ),
    )
    op.create_index("idx_resources_community_id", "resources", ["community_id"])
    op.create_index(
        "idx_resources_created_at", "resources", [sa.text("created_at DESC")]
    )
    op.create_index("idx_resources_submitted_by", "resources", ["submitted_by"])

    # ========================================================================
    # RESOURCE_REPORTS table
    # ========================================================================
    op.create_table(
        "resource_reports",
        _id_column(),
        sa.Column("resource_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "reason",
            postgresql.ENUM(name="report_reason", create_type=False),
            nullable=False,
        ),
        sa.Column("description", sa.String(500), nullable=True),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["resource_id"], ["resources.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("resource_id", "user_id", name="unique_report"),
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        _id_column(),
        sa.Column("resource_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("root_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_username", sa.String(30), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "edit_history",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["resource_id"], ["resources.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["root_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("depth >= 0 AND depth <= 5", name="depth_in_range"),
        sa.CheckConstraint(
            "upvotes >= 0 AND downvotes >= 0", name="comment_votes_non_negative"
        ),
    )
    # Top-level page queries
    op.create_index(
        "idx_comments_resource_top_level",
        "comments",
        ["resource_id", "created_at"],
        postgresql_where=sa.text("parent_id IS NULL"),
    )
    # Whole-thread loads for a page of top-level comments
    op.create_index("idx_comments_root_id", "comments", ["root_id"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "votable_type",
            postgresql.ENUM(name="votable_type", create_type=False),
            nullable=False,
        ),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column(
            "vote_type",
            postgresql.ENUM(name="vote_type", create_type=False),
            nullable=False,
        ),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        # One vote record per user per entity
        sa.UniqueConstraint(
            "user_id", "votable_type", "votable_id", name="unique_vote"
        ),
    )
    op.create_index("idx_votes_votable", "votes", ["votable_type", "votable_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("votes")
    op.drop_table("comments")
    op.drop_table("resource_reports")
    op.drop_table("resources")
    op.drop_table("communities")
    op.drop_table("users")

    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
