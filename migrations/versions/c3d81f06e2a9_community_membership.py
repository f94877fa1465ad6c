"""community_membership

Revision ID: c3d81f06e2a9
Revises: a7e24d5c91b3
Create Date: 2026-10-17 14:12:45.104377

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "c3d81f06e2a9"
down_revision: Union[str, Sequence[str], None] = "a7e24d5c91b3"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column(
        "communities",
        sa.Column("member_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.add_column(
        "communities",
        sa.Column("created_by", sa.UUID(), nullable=True),
    )
    op.create_foreign_key(
        "communities_created_by_fkey",
        "communities",
        "users",
        ["created_by"],
        ["id"],
        ondelete="SET NULL",
    )

    op.create_table(
        "community_members",
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "joined_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["community_id"], ["communities.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("community_id", "user_id"),
    )
    op.create_index(
        "idx_community_members_user_id", "community_members", ["user_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_community_members_user_id", table_name="community_members")
    op.drop_table("community_members")
    op.drop_constraint(
        "communities_created_by_fkey", "communities", type_="foreignkey"
    )
    op.drop_column("communities", "created_by")
    op.drop_column("communities", "member_count")
