from datetime import datetime

from pydantic import BaseModel, Field

from halal_gains.models.workout_plan import WorkoutDifficulty, WorkoutGoal, WorkoutType


class WorkoutPlanBase(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    duration: str | None = None
    goal: WorkoutGoal = WorkoutGoal.WEIGHT_LOSS
    difficulty: WorkoutDifficulty = WorkoutDifficulty.BEGINNER
    client_id: int | None = None


class WorkoutPlanCreate(WorkoutPlanBase):
    pass


class WorkoutPlanUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    duration: str | None = None
    goal: WorkoutGoal | None = None
    difficulty: WorkoutDifficulty | None = None
    client_id: int | None = None


class WorkoutPlanPublic(WorkoutPlanBase):
    id: int
    coach_id: int | None = None
    created_at: datetime
    updated_at: datetime
    client_name: str | None = None
    client_photo: str | None = None
    total_weeks: int = 0
    completed_weeks: int = 0


class WorkoutWeekCreate(BaseModel):
    week_number: int = Field(ge=1)


class WorkoutDayCreate(BaseModel):
    day_of_week: int = Field(ge=0, le=6)  # 0 = Sunday
    workout_type: WorkoutType = WorkoutType.STRENGTH
    prayer_time_notes: str | None = None


class WorkoutExerciseCreate(BaseModel):
    exercise_name: str = Field(min_length=1)
    sets: int | None = Field(default=None, ge=1)
    reps: int | None = Field(default=None, ge=1)
    rest_period_seconds: int | None = Field(default=None, ge=0)
    notes: str | None = None


class WorkoutExercisePublic(WorkoutExerciseCreate):
    id: int
    workout_day_id: int
    exercise_order: int

    class Config:
        from_attributes = True


class WorkoutDayPublic(WorkoutDayCreate):
    id: int
    workout_week_id: int
    exercises: list[WorkoutExercisePublic] = []

    class Config:
        from_attributes = True


class WorkoutWeekPublic(BaseModel):
    id: int
    workout_plan_id: int
    week_number: int
    days: list[WorkoutDayPublic] = []

    class Config:
        from_attributes = True


class WorkoutWeekCompletionPublic(BaseModel):
    workout_plan_id: int
    user_id: int
    week_number: int
    completed_at: datetime

    class Config:
        from_attributes = True


class ExerciseLogIn(BaseModel):
    workout_exercise_id: int
    completed: bool = True
    actual_sets: int | None = Field(default=None, ge=0)
    actual_reps: int | None = Field(default=None, ge=0)
    weight_used_kg: float | None = Field(default=None, ge=0)
    notes: str | None = None


class WorkoutDayLog(BaseModel):
    notes: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    exercises: list[ExerciseLogIn] = Field(default_factory=list)


class ExerciseCompletionUpdate(BaseModel):
    completed: bool = True


class ExerciseCompletionPublic(ExerciseLogIn):
    id: int
    workout_day_completion_id: int

    class Config:
        from_attributes = True


class WorkoutDayCompletionPublic(BaseModel):
    id: int
    workout_day_id: int
    user_id: int
    notes: str | None = None
    rating: int | None = None
    completed_at: datetime
    updated_at: datetime
    exercise_completions: list[ExerciseCompletionPublic] = []

    class Config:
        from_attributes = True


class WorkoutPlanDetail(WorkoutPlanPublic):
    weeks: list[WorkoutWeekPublic] = []
