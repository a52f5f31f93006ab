"""initial schema

Revision ID: 3f1a9c2d7b10
Revises:
Create Date: 2025-03-02 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_id', 'users', ['id'])

    op.create_table(
        'coach_profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('specialties', sa.JSON(), nullable=False),
        sa.Column('years_of_experience', sa.Integer(), nullable=True),
        sa.Column('profile_photos', sa.JSON(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_coach_profiles_id', 'coach_profiles', ['id'])
    op.create_index('ix_coach_profiles_user_id', 'coach_profiles', ['user_id'], unique=True)

    # coach_id is added by the following revision
    op.create_table(
        'client_profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('gender', sa.Enum('MALE', 'FEMALE', name='gender'), nullable=True),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        sa.Column('fitness_level', sa.Enum('UNFIT', 'HEALTHY', 'ATHLETE', name='fitnesslevel'), nullable=False),
        sa.Column('fitness_goal', sa.Enum('LOSE_WEIGHT', 'BUILD_MUSCLE', name='fitnessgoal'), nullable=False),
        sa.Column('post_pregnancy_recovery', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('profile_photo', sa.String(length=512), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_client_profiles_id', 'client_profiles', ['id'])
    op.create_index('ix_client_profiles_user_id', 'client_profiles', ['user_id'], unique=True)

    op.create_table(
        'conversations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('coach_id', sa.Integer(), sa.ForeignKey('coach_profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_conversations_id', 'conversations', ['id'])
    op.create_index('ix_conversations_coach_id', 'conversations', ['coach_id'])
    op.create_index('ix_conversations_client_id', 'conversations', ['client_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('conversation_id', sa.Integer(), sa.ForeignKey('conversations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_messages_id', 'messages', ['id'])
    op.create_index('ix_messages_conversation_id', 'messages', ['conversation_id'])
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])

    op.create_table(
        'meal_plans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('coach_id', sa.Integer(), sa.ForeignKey('coach_profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('client_profiles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('calories_target', sa.Integer(), nullable=True),
        sa.Column('protein_target_g', sa.Integer(), nullable=True),
        sa.Column('carbs_target_g', sa.Integer(), nullable=True),
        sa.Column('fats_target_g', sa.Integer(), nullable=True),
        sa.Column('ramadan_mode', sa.Boolean(), nullable=False, server_default='false'),
        *_timestamps(),
    )
    op.create_index('ix_meal_plans_id', 'meal_plans', ['id'])
    op.create_index('ix_meal_plans_coach_id', 'meal_plans', ['coach_id'])
    op.create_index('ix_meal_plans_client_id', 'meal_plans', ['client_id'])

    op.create_table(
        'meal_plan_days',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('meal_plan_id', sa.Integer(), sa.ForeignKey('meal_plans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_number', sa.Integer(), nullable=False),
        sa.Column('day_name', sa.String(length=64), nullable=True),
        sa.UniqueConstraint('meal_plan_id', 'day_number', name='uq_meal_plan_days_plan_day'),
    )
    op.create_index('ix_meal_plan_days_id', 'meal_plan_days', ['id'])
    op.create_index('ix_meal_plan_days_meal_plan_id', 'meal_plan_days', ['meal_plan_id'])

    op.create_table(
        'meal_plan_meals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('meal_plan_day_id', sa.Integer(), sa.ForeignKey('meal_plan_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('meal_type', sa.String(length=32), nullable=False),
        sa.Column('meal_name', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('total_calories', sa.Integer(), nullable=True),
    )
    op.create_index('ix_meal_plan_meals_id', 'meal_plan_meals', ['id'])
    op.create_index('ix_meal_plan_meals_meal_plan_day_id', 'meal_plan_meals', ['meal_plan_day_id'])

    op.create_table(
        'meal_plan_foods',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('meal_plan_meal_id', sa.Integer(), sa.ForeignKey('meal_plan_meals.id', ondelete='CASCADE'), nullable=False),
        sa.Column('food_name', sa.String(length=255), nullable=False),
        sa.Column('serving_size', sa.String(length=64), nullable=True),
        sa.Column('quantity', sa.Float(), nullable=True),
        sa.Column('calories', sa.Integer(), nullable=True),
        sa.Column('food_order', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_meal_plan_foods_id', 'meal_plan_foods', ['id'])
    op.create_index('ix_meal_plan_foods_meal_plan_meal_id', 'meal_plan_foods', ['meal_plan_meal_id'])

    op.create_table(
        'hydration_reminders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('reminder_time', sa.Time(), nullable=False),
        sa.Column('reminder_message', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('ramadan_only', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
    )
    op.create_index('ix_hydration_reminders_id', 'hydration_reminders', ['id'])
    op.create_index('ix_hydration_reminders_user_id', 'hydration_reminders', ['user_id'])

    op.create_table(
        'workout_plans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('coach_id', sa.Integer(), sa.ForeignKey('coach_profiles.id', ondelete='CASCADE'), nullable=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('client_profiles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('duration', sa.String(length=64), nullable=True),
        sa.Column('goal', sa.Enum('WEIGHT_LOSS', 'MUSCLE_GAIN', name='workoutgoal'), nullable=False),
        sa.Column('difficulty', sa.Enum('BEGINNER', 'INTERMEDIATE', 'ADVANCED', name='workoutdifficulty'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_workout_plans_id', 'workout_plans', ['id'])
    op.create_index('ix_workout_plans_coach_id', 'workout_plans', ['coach_id'])
    op.create_index('ix_workout_plans_client_id', 'workout_plans', ['client_id'])

    op.create_table(
        'workout_weeks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_plan_id', sa.Integer(), sa.ForeignKey('workout_plans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.UniqueConstraint('workout_plan_id', 'week_number', name='uq_workout_weeks_plan_week'),
    )
    op.create_index('ix_workout_weeks_id', 'workout_weeks', ['id'])
    op.create_index('ix_workout_weeks_workout_plan_id', 'workout_weeks', ['workout_plan_id'])

    op.create_table(
        'workout_days',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_week_id', sa.Integer(), sa.ForeignKey('workout_weeks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('workout_type', sa.Enum('CARDIO', 'STRENGTH', 'BOXING', 'REST', name='workouttype'), nullable=False),
        sa.Column('prayer_time_notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_workout_days_id', 'workout_days', ['id'])
    op.create_index('ix_workout_days_workout_week_id', 'workout_days', ['workout_week_id'])

    op.create_table(
        'workout_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_day_id', sa.Integer(), sa.ForeignKey('workout_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_name', sa.String(length=255), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=True),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('rest_period_seconds', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('exercise_order', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_workout_exercises_id', 'workout_exercises', ['id'])
    op.create_index('ix_workout_exercises_workout_day_id', 'workout_exercises', ['workout_day_id'])

    op.create_table(
        'workout_week_completions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_plan_id', sa.Integer(), sa.ForeignKey('workout_plans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('workout_plan_id', 'user_id', 'week_number', name='uq_week_completions'),
    )
    op.create_index('ix_workout_week_completions_id', 'workout_week_completions', ['id'])
    op.create_index('ix_workout_week_completions_workout_plan_id', 'workout_week_completions', ['workout_plan_id'])


def downgrade() -> None:
    for table in (
        'workout_week_completions',
        'workout_exercises',
        'workout_days',
        'workout_weeks',
        'workout_plans',
        'hydration_reminders',
        'meal_plan_foods',
        'meal_plan_meals',
        'meal_plan_days',
        'meal_plans',
        'messages',
        'conversations',
        'client_profiles',
        'coach_profiles',
        'users',
    ):
        op.drop_table(table)
