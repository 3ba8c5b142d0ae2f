"""Sessions, meals and meal ownership

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sessions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )

    op.create_table(
        "meals",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("in_diet", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("seq", sa.Integer(), nullable=False, unique=True),
    )
    op.create_index("ix_meals_title", "meals", ["title"])
    op.create_index("ix_meals_created_at", "meals", ["created_at"])

    op.create_table(
        "meal_sessions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("meal_id", sa.String(length=36), sa.ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("session_id", sa.String(length=36), sa.ForeignKey("sessions.id"), nullable=False),
    )
    op.create_index("ix_meal_sessions_session_id", "meal_sessions", ["session_id"])


def downgrade() -> None:
    op.drop_index("ix_meal_sessions_session_id", table_name="meal_sessions")
    op.drop_table("meal_sessions")
    op.drop_index("ix_meals_created_at", table_name="meals")
    op.drop_index("ix_meals_title", table_name="meals")
    op.drop_table("meals")
    op.drop_table("sessions")
