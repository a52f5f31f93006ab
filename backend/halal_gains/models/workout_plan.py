from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from halal_gains.db.base import Base

CASCADE_ALL_DELETE_ORPHAN = "all, delete-orphan"


class WorkoutGoal(str, PyEnum):
    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"


class WorkoutDifficulty(str, PyEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class WorkoutType(str, PyEnum):
    CARDIO = "cardio"
    STRENGTH = "strength"
    BOXING = "boxing"
    REST = "rest"


class WorkoutPlan(Base):
    __tablename__ = "workout_plans"

    id = Column(Integer, primary_key=True, index=True)
    coach_id = Column(
        Integer, ForeignKey("coach_profiles.id", ondelete="CASCADE"), nullable=True, index=True
    )
    # Client profile id. Older rows may hold the client's account id instead,
    # see halal_gains.maintenance.fix_workout_plan_client_ids
    client_id = Column(
        Integer, ForeignKey("client_profiles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration = Column(String(64), nullable=True)  # free text, e.g. "8 weeks"
    goal = Column(SQLEnum(WorkoutGoal), nullable=False, default=WorkoutGoal.WEIGHT_LOSS)
    difficulty = Column(
        SQLEnum(WorkoutDifficulty), nullable=False, default=WorkoutDifficulty.BEGINNER
    )
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    client = relationship("ClientProfile")
    weeks = relationship(
        "WorkoutWeek",
        back_populates="workout_plan",
        cascade=CASCADE_ALL_DELETE_ORPHAN,
        order_by="WorkoutWeek.week_number",
    )
    completions = relationship(
        "WorkoutWeekCompletion",
        back_populates="workout_plan",
        cascade=CASCADE_ALL_DELETE_ORPHAN,
    )


class WorkoutWeek(Base):
    __tablename__ = "workout_weeks"
    __table_args__ = (
        UniqueConstraint("workout_plan_id", "week_number", name="uq_workout_weeks_plan_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    workout_plan_id = Column(
        Integer, ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_number = Column(Integer, nullable=False)

    workout_plan = relationship("WorkoutPlan", back_populates="weeks")
    days = relationship(
        "WorkoutDay",
        back_populates="week",
        cascade=CASCADE_ALL_DELETE_ORPHAN,
        order_by="WorkoutDay.day_of_week",
    )


class WorkoutDay(Base):
    __tablename__ = "workout_days"

    id = Column(Integer, primary_key=True, index=True)
    workout_week_id = Column(
        Integer, ForeignKey("workout_weeks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday
    workout_type = Column(SQLEnum(WorkoutType), nullable=False, default=WorkoutType.STRENGTH)
    prayer_time_notes = Column(Text, nullable=True)

    week = relationship("WorkoutWeek", back_populates="days")
    exercises = relationship(
        "WorkoutExercise",
        back_populates="day",
        cascade=CASCADE_ALL_DELETE_ORPHAN,
        order_by="WorkoutExercise.exercise_order",
    )
    completions = relationship(
        "WorkoutDayCompletion", back_populates="day", cascade=CASCADE_ALL_DELETE_ORPHAN
    )


class WorkoutExercise(Base):
    __tablename__ = "workout_exercises"

    id = Column(Integer, primary_key=True, index=True)
    workout_day_id = Column(
        Integer, ForeignKey("workout_days.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_name = Column(String(255), nullable=False)
    sets = Column(Integer, nullable=True)
    reps = Column(Integer, nullable=True)
    rest_period_seconds = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    exercise_order = Column(Integer, nullable=False, default=0)

    day = relationship("WorkoutDay", back_populates="exercises")
    completions = relationship(
        "ExerciseCompletion", back_populates="exercise", cascade=CASCADE_ALL_DELETE_ORPHAN
    )


class WorkoutWeekCompletion(Base):
    __tablename__ = "workout_week_completions"
    __table_args__ = (
        UniqueConstraint(
            "workout_plan_id", "user_id", "week_number", name="uq_week_completions"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    workout_plan_id = Column(
        Integer, ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    week_number = Column(Integer, nullable=False)
    completed_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    workout_plan = relationship("WorkoutPlan", back_populates="completions")


class WorkoutDayCompletion(Base):
    __tablename__ = "workout_day_completions"
    __table_args__ = (
        UniqueConstraint("workout_day_id", "user_id", name="uq_day_completions"),
    )

    id = Column(Integer, primary_key=True, index=True)
    workout_day_id = Column(
        Integer, ForeignKey("workout_days.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    notes = Column(Text, nullable=True)
    rating = Column(Integer, nullable=True)  # 1-5 stars
    completed_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    day = relationship("WorkoutDay", back_populates="completions")
    exercise_completions = relationship(
        "ExerciseCompletion",
        back_populates="day_completion",
        cascade=CASCADE_ALL_DELETE_ORPHAN,
        order_by="ExerciseCompletion.id",
    )


class ExerciseCompletion(Base):
    __tablename__ = "exercise_completions"
    __table_args__ = (
        UniqueConstraint(
            "workout_day_completion_id", "workout_exercise_id", name="uq_exercise_completions"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    workout_day_completion_id = Column(
        Integer,
        ForeignKey("workout_day_completions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    workout_exercise_id = Column(
        Integer, ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False
    )
    completed = Column(Boolean, nullable=False, default=True)
    actual_sets = Column(Integer, nullable=True)
    actual_reps = Column(Integer, nullable=True)
    weight_used_kg = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    day_completion = relationship("WorkoutDayCompletion", back_populates="exercise_completions")
    exercise = relationship("WorkoutExercise", back_populates="completions")
