"""create friends table

Revision ID: 392349af8917
Revises: 3854834d3c61
Create Date: 2026-01-17 16:46:54.687375

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy import func

# revision identifiers, used by Alembic.
revision: str = '392349af8917'
down_revision: Union[str, Sequence[str], None] = '3854834d3c61'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "friends",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column("initiator_id", sa.String(36), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recipient_id", sa.String(36), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("pair_key", sa.String(80), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=func.now()),
        sa.UniqueConstraint("initiator_id", "recipient_id", name="unique_friendship"),
        sa.UniqueConstraint("pair_key", name="unique_friendship_pair"),
        sa.CheckConstraint("initiator_id <> recipient_id", name="no_self_friendship"),
        sa.CheckConstraint("status IN ('pending', 'accepted', 'blocked')", name="friendship_status"),
    )
    op.create_index("ix_friends_recipient_status", "friends", ["recipient_id", "status"])


def downgrade() -> None:
    op.drop_index("ix_friends_recipient_status", table_name="friends")
    op.drop_table("friends")
