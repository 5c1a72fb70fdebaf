"""add import batches table

Revision ID: 0003_import_metadata
Revises: 0002_alerts_tables
Create Date: 2026-04-06 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0003_import_metadata"
down_revision: Union[str, None] = "0002_alerts_tables"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "import_batches",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("source", sa.String(length=32), nullable=False),
        sa.Column("period_id", sa.String(length=36), nullable=True),
        sa.Column("started_at", sa.String(length=40), nullable=False),
        sa.Column("finished_at", sa.String(length=40), nullable=True),
        sa.Column("imported_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("duplicates_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("error_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["period_id"], ["periods.id"], ),
    )
    op.create_index("idx_import_batches_period", "import_batches", ["period_id"], unique=False)
    op.create_index("idx_import_batches_started", "import_batches", ["started_at"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_import_batches_started", table_name="import_batches")
    op.drop_index("idx_import_batches_period", table_name="import_batches")
    op.drop_table("import_batches")
