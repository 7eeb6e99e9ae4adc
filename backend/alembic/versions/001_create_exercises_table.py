"""Create exercises table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `exercises` table holding one row per logged exercise.
How:   Portable column types (Uuid renders as UUID on PostgreSQL).

Rollback: downgrade() drops the table (all exercise data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the exercises table. See exercise_api/models/exercise.py."""
    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Integer(), nullable=False),
        # "lbs" or "kgs"
        sa.Column("unit", sa.String(3), nullable=False),
        # MM-DD-YY as sent by the client
        sa.Column("date", sa.String(8), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop the exercises table entirely."""
    op.drop_table("exercises")
