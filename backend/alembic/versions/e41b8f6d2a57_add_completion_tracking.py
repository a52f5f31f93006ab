"""add workout day, exercise and meal plan completion tracking

Revision ID: e41b8f6d2a57
Revises: c7e5a1f09b42
Create Date: 2025-04-19 10:40:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'e41b8f6d2a57'
down_revision: Union[str, None] = 'c7e5a1f09b42'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'workout_day_completions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_day_id', sa.Integer(), sa.ForeignKey('workout_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('workout_day_id', 'user_id', name='uq_day_completions'),
    )
    op.create_index('ix_workout_day_completions_id', 'workout_day_completions', ['id'])
    op.create_index('ix_workout_day_completions_workout_day_id', 'workout_day_completions', ['workout_day_id'])

    op.create_table(
        'exercise_completions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_day_completion_id', sa.Integer(), sa.ForeignKey('workout_day_completions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('workout_exercise_id', sa.Integer(), sa.ForeignKey('workout_exercises.id', ondelete='CASCADE'), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('actual_sets', sa.Integer(), nullable=True),
        sa.Column('actual_reps', sa.Integer(), nullable=True),
        sa.Column('weight_used_kg', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.UniqueConstraint('workout_day_completion_id', 'workout_exercise_id', name='uq_exercise_completions'),
    )
    op.create_index('ix_exercise_completions_id', 'exercise_completions', ['id'])
    op.create_index('ix_exercise_completions_workout_day_completion_id', 'exercise_completions', ['workout_day_completion_id'])

    op.create_table(
        'meal_plan_day_completions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('meal_plan_day_id', sa.Integer(), sa.ForeignKey('meal_plan_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('meal_plan_day_id', 'user_id', name='uq_meal_plan_day_completions'),
    )
    op.create_index('ix_meal_plan_day_completions_id', 'meal_plan_day_completions', ['id'])
    op.create_index('ix_meal_plan_day_completions_meal_plan_day_id', 'meal_plan_day_completions', ['meal_plan_day_id'])

    op.create_table(
        'meal_plan_week_completions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('meal_plan_id', sa.Integer(), sa.ForeignKey('meal_plans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('meal_plan_id', 'user_id', 'week_number', name='uq_meal_plan_week_completions'),
    )
    op.create_index('ix_meal_plan_week_completions_id', 'meal_plan_week_completions', ['id'])
    op.create_index('ix_meal_plan_week_completions_meal_plan_id', 'meal_plan_week_completions', ['meal_plan_id'])


def downgrade() -> None:
    for table in (
        'meal_plan_week_completions',
        'meal_plan_day_completions',
        'exercise_completions',
        'workout_day_completions',
    ):
        op.drop_table(table)
