"""Reward catalog table.

Revision ID: 20261016_01
Revises: 
Create Date: 2026-10-16
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261016_01"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    cost_check = sa.CheckConstraint("cost >= 0", name="ck_rewards_cost_non_negative")
    stock_check = sa.CheckConstraint(
        "stock_quantity IS NULL OR stock_quantity >= 0",
        name="ck_rewards_stock_non_negative",
    )

    op.create_table(
        "rewards",
        sa.Column("id", sa.dialects.postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("cost", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("stock_quantity", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("display_order", sa.Integer(), nullable=True),
        sa.Column("min_status_tier", sa.String(), nullable=True),
        sa.Column("status_tier_claims_cost", sa.JSON(), nullable=True),
        sa.Column("sponsor_enabled", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("sponsor_name", sa.String(), nullable=True),
        sa.Column("sponsor_logo", sa.String(), nullable=True),
        sa.Column("sponsor_link", sa.String(), nullable=True),
        sa.Column("sponsor_start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sponsor_end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("claim_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("wishlist_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        cost_check,
        stock_check,
    )

    op.create_index("ix_rewards_category", "rewards", ["category"])
    op.create_index("ix_rewards_display_order", "rewards", ["display_order"])


def downgrade() -> None:
    op.drop_index("ix_rewards_display_order", table_name="rewards")
    op.drop_index("ix_rewards_category", table_name="rewards")
    op.drop_table("rewards")
