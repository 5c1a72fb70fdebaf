"""init core tables (periods, categories, budgets, transactions, settings)

Revision ID: 0001_init_core_tables
Revises:
Create Date: 2026-04-01 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_init_core_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _enum(*values: str, name: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        "periods",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("cycle_type", _enum("monthly", "biweekly", name="cycle_type"), nullable=False),
        sa.Column("start_date", sa.String(length=10), nullable=False),
        sa.Column("end_date", sa.String(length=10), nullable=False),
        sa.Column("income_cents", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.String(length=40), nullable=False),
        sa.Column("closed_at", sa.String(length=40), nullable=True),
        sa.CheckConstraint("start_date <= end_date", name="ck_period_range"),
    )
    op.create_index("idx_periods_date_window", "periods", ["start_date", "end_date"], unique=False)
    op.create_index("idx_periods_cycle_type", "periods", ["cycle_type"], unique=False)

    op.create_table(
        "categories",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("kind", _enum("need", "want", name="category_kind"), nullable=False),
        sa.Column("icon", sa.String(length=64), nullable=False),
        sa.Column("color", sa.String(length=16), nullable=False),
        sa.Column("archived_at", sa.String(length=40), nullable=True),
    )
    op.create_index("idx_categories_name", "categories", ["name"], unique=False)

    op.create_table(
        "budgets",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("period_id", sa.String(length=36), nullable=False),
        sa.Column("category_id", sa.String(length=36), nullable=False),
        sa.Column("cadence", _enum("monthly", "weekly", name="cadence"), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("rollover_rule", _enum("reset", "pos", "pos_neg", name="rollover_rule"), nullable=False),
        sa.Column("carryover_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.String(length=40), nullable=False),
        sa.ForeignKeyConstraint(["period_id"], ["periods.id"], ),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ),
        sa.UniqueConstraint("period_id", "category_id", name="uq_budget_period_category"),
    )
    op.create_index("idx_budgets_period_id", "budgets", ["period_id"], unique=False)
    op.create_index("idx_budgets_category_id", "budgets", ["category_id"], unique=False)

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.String(length=36), nullable=False),
        sa.Column("period_id", sa.String(length=36), nullable=False),
        sa.Column("merchant", sa.String(length=200), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("source", _enum("manual", "import", name="transaction_source"), nullable=False),
        sa.Column("external_id", sa.String(length=128), nullable=True),
        sa.Column("status", _enum("posted", "pending", name="transaction_status"), nullable=False),
        sa.Column("created_at", sa.String(length=40), nullable=False),
        sa.Column("updated_at", sa.String(length=40), nullable=False),
        sa.Column("deleted_at", sa.String(length=40), nullable=True),
        sa.ForeignKeyConstraint(["period_id"], ["periods.id"], ),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ),
    )
    op.create_index("idx_transactions_period_date", "transactions", ["period_id", "date"], unique=False)
    op.create_index("idx_transactions_category_date", "transactions", ["category_id", "date"], unique=False)
    op.create_index(
        "idx_transactions_period_category_date",
        "transactions",
        ["period_id", "category_id", "date"],
        unique=False,
    )
    op.create_index("idx_transactions_not_deleted", "transactions", ["deleted_at"], unique=False)
    op.create_index("idx_transactions_external_id", "transactions", ["external_id"], unique=False)

    settings_table = op.create_table(
        "settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("cycle_type", _enum("monthly", "biweekly", name="settings_cycle_type"), nullable=False),
        sa.Column("week_start", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("locale", sa.String(length=32), nullable=False),
        sa.Column("biweekly_anchor_date", sa.String(length=10), nullable=True),
        sa.Column("app_lock_enabled", sa.Boolean(), nullable=False),
        sa.CheckConstraint("id = 1", name="ck_settings_singleton"),
        sa.CheckConstraint("week_start >= 0 AND week_start <= 6", name="ck_settings_week_start"),
    )
    op.bulk_insert(
        settings_table,
        [
            {
                "id": 1,
                "cycle_type": "monthly",
                "week_start": 1,
                "currency": "USD",
                "locale": "en-US",
                "biweekly_anchor_date": None,
                "app_lock_enabled": False,
            }
        ],
    )


def downgrade() -> None:
    op.drop_table("settings")
    op.drop_index("idx_transactions_external_id", table_name="transactions")
    op.drop_index("idx_transactions_not_deleted", table_name="transactions")
    op.drop_index("idx_transactions_period_category_date", table_name="transactions")
    op.drop_index("idx_transactions_category_date", table_name="transactions")
    op.drop_index("idx_transactions_period_date", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("idx_budgets_category_id", table_name="budgets")
    op.drop_index("idx_budgets_period_id", table_name="budgets")
    op.drop_table("budgets")
    op.drop_index("idx_categories_name", table_name="categories")
    op.drop_table("categories")
    op.drop_index("idx_periods_cycle_type", table_name="periods")
    op.drop_index("idx_periods_date_window", table_name="periods")
    op.drop_table("periods")
