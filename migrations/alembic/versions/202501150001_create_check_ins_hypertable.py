"""Create check_ins hypertable"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from timescale_migrations import alembic_migrator

# revision identifiers, used by Alembic.
revision = "202501150001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS timescaledb")
    alembic_migrator(function_name="create_hypertable").create_hyper_table(
        "check_ins",
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("checked_in_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        time_column_name="checked_in_at",
        chunk_time_interval="1 day",
    )


def downgrade() -> None:
    op.drop_table("check_ins")
