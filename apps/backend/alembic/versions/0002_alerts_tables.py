"""add alert rules and alerts tables

Revision ID: 0002_alerts_tables
Revises: 0001_init_core_tables
Create Date: 2026-04-03 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002_alerts_tables"
down_revision: Union[str, None] = "0001_init_core_tables"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "alert_rules",
        sa.Column("category_id", sa.String(length=36), primary_key=True),
        sa.Column("approaching_limit_percent", sa.Integer(), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ),
    )

    op.create_table(
        "alerts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("category_id", sa.String(length=36), nullable=False),
        sa.Column("period_id", sa.String(length=36), nullable=False),
        sa.Column(
            "type",
            sa.Enum("approaching_limit", "overspent", name="alert_type", native_enum=False, create_constraint=True),
            nullable=False,
        ),
        sa.Column("threshold_percent", sa.Integer(), nullable=False),
        sa.Column("triggered_at", sa.String(length=40), nullable=False),
        sa.Column("dismissed_at", sa.String(length=40), nullable=True),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ),
        sa.ForeignKeyConstraint(["period_id"], ["periods.id"], ),
    )
    op.create_index("idx_alerts_period_category", "alerts", ["period_id", "category_id"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_alerts_period_category", table_name="alerts")
    op.drop_table("alerts")
    op.drop_table("alert_rules")
