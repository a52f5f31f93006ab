from halal_gains.models.user import User
from halal_gains.models.profile import (
    ClientProfile,
    CoachProfile,
    FitnessGoal,
    FitnessLevel,
    Gender,
)
from halal_gains.models.conversation import Conversation, Message
from halal_gains.models.meal_plan import (
    MealPlan,
    MealPlanDay,
    MealPlanDayCompletion,
    MealPlanFood,
    MealPlanMeal,
    MealPlanWeekCompletion,
)
from halal_gains.models.hydration_reminder import HydrationReminder
from halal_gains.models.workout_plan import (
    ExerciseCompletion,
    WorkoutDay,
    WorkoutDayCompletion,
    WorkoutDifficulty,
    WorkoutExercise,
    WorkoutGoal,
    WorkoutPlan,
    WorkoutType,
    WorkoutWeek,
    WorkoutWeekCompletion,
)

__all__ = [
    "User",
    "CoachProfile",
    "ClientProfile",
    "Gender",
    "FitnessLevel",
    "FitnessGoal",
    "Conversation",
    "Message",
    "MealPlan",
    "MealPlanDay",
    "MealPlanMeal",
    "MealPlanFood",
    "MealPlanDayCompletion",
    "MealPlanWeekCompletion",
    "HydrationReminder",
    "WorkoutPlan",
    "WorkoutWeek",
    "WorkoutDay",
    "WorkoutExercise",
    "WorkoutWeekCompletion",
    "WorkoutDayCompletion",
    "ExerciseCompletion",
    "WorkoutGoal",
    "WorkoutDifficulty",
    "WorkoutType",
]
