"""Create weighins and runs tables

Revision ID: 001
Revises: None
Create Date: 2025-06-01 00:00:00.000000+00:00

What:  Initial schema: one table per record type, with the range rules as
       named CHECK constraints (see healthtracker/models/).
Rollback: downgrade() drops both tables and every row in them.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "weighins",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("date", sa.Text(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("bmi", sa.Float(), nullable=False),
        sa.Column("fat", sa.Float(), nullable=True),
        sa.Column("muscle", sa.Float(), nullable=True),
        sa.Column("restingMetab", sa.Integer(), nullable=True),
        sa.Column("visceralFat", sa.Integer(), nullable=True),
        sa.CheckConstraint("weight BETWEEN 100 AND 300", name="ck_weighins_weight"),
        sa.CheckConstraint("fat BETWEEN 0 AND 100", name="ck_weighins_fat"),
        sa.CheckConstraint("muscle BETWEEN 0 AND 100", name="ck_weighins_muscle"),
        sa.CheckConstraint('"restingMetab" > 1000', name="ck_weighins_resting_metab"),
        sa.CheckConstraint('"visceralFat" BETWEEN 10 AND 30', name="ck_weighins_visceral_fat"),
        sqlite_autoincrement=True,
    )
    op.create_index("idx_weighins_date", "weighins", [sa.text("date DESC")])

    op.create_table(
        "runs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("date", sa.Text(), nullable=False),
        sa.Column("distance", sa.Float(), nullable=False),
        sa.Column("distanceUnit", sa.Text(), nullable=False),
        sa.Column("time", sa.Integer(), nullable=False),
        sa.CheckConstraint("distance > 0", name="ck_runs_distance"),
        sa.CheckConstraint("time >= 0", name="ck_runs_time"),
        sqlite_autoincrement=True,
    )
    op.create_index("idx_runs_date", "runs", [sa.text("date DESC")])


def downgrade() -> None:
    op.drop_index("idx_runs_date", table_name="runs")
    op.drop_table("runs")
    op.drop_index("idx_weighins_date", table_name="weighins")
    op.drop_table("weighins")
