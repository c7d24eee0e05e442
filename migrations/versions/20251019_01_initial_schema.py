"""Initial workout creator schema."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20251019_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "exercises",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("training_method", sa.JSON(), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=True),
        sa.Column("equipment", sa.JSON(), nullable=True),
        sa.Column("primary_muscles", sa.JSON(), nullable=True),
        sa.Column("secondary_muscles", sa.JSON(), nullable=True),
        sa.Column("video_url", sa.String(length=500), nullable=True),
        sa.Column("gif_url", sa.String(length=500), nullable=True),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        sa.Column("form_notes", sa.Text(), nullable=True),
        sa.Column("last_used_date", sa.DateTime(), nullable=True),
        sa.Column("use_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_custom", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_favorite", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("search_text", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index("ix_exercises_name", "exercises", ["name"], unique=False)
    op.create_index("ix_exercises_category", "exercises", ["category"], unique=False)
    op.create_index("ix_exercises_last_used_date", "exercises", ["last_used_date"], unique=False)
    op.create_index("ix_exercises_is_custom", "exercises", ["is_custom"], unique=False)
    op.create_index("ix_exercises_is_archived", "exercises", ["is_archived"], unique=False)

    op.create_table(
        "workouts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("date_and_time", sa.DateTime(), nullable=False),
        sa.Column("total_duration", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index("ix_workouts_date_and_time", "workouts", ["date_and_time"], unique=False)

    op.create_table(
        "intervals",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "workout_id",
            sa.String(length=36),
            sa.ForeignKey("workouts.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("rounds", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("rest_between_rounds", sa.Integer(), nullable=True),
        sa.Column("rest_after_interval", sa.Integer(), nullable=True),
    )
    op.create_index("ix_intervals_workout_id", "intervals", ["workout_id"], unique=False)

    op.create_table(
        "interval_exercises",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "interval_id",
            sa.String(length=36),
            sa.ForeignKey("intervals.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "exercise_id",
            sa.String(length=36),
            sa.ForeignKey("exercises.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("effort", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("rest_after", sa.Integer(), nullable=True),
        sa.Column("tempo", sa.JSON(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index("ix_interval_exercises_interval_id", "interval_exercises", ["interval_id"], unique=False)
    op.create_index("ix_interval_exercises_exercise_id", "interval_exercises", ["exercise_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_interval_exercises_exercise_id", table_name="interval_exercises")
    op.drop_index("ix_interval_exercises_interval_id", table_name="interval_exercises")
    op.drop_table("interval_exercises")

    op.drop_index("ix_intervals_workout_id", table_name="intervals")
    op.drop_table("intervals")

    op.drop_index("ix_workouts_date_and_time", table_name="workouts")
    op.drop_table("workouts")

    op.drop_index("ix_exercises_is_archived", table_name="exercises")
    op.drop_index("ix_exercises_is_custom", table_name="exercises")
    op.drop_index("ix_exercises_last_used_date", table_name="exercises")
    op.drop_index("ix_exercises_category", table_name="exercises")
    op.drop_index("ix_exercises_name", table_name="exercises")
    op.drop_table("exercises")
