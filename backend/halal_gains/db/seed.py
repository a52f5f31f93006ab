from datetime import time

from sqlalchemy.orm import Session

from halal_gains.core.config import get_settings
from halal_gains.core.security import get_password_hash
from halal_gains.db.session import create_db_engine, create_session_factory
from halal_gains.models.hydration_reminder import HydrationReminder
from halal_gains.models.meal_plan import MealPlan
from halal_gains.models.profile import ClientProfile, CoachProfile, FitnessGoal, FitnessLevel, Gender
from halal_gains.models.user import User
from halal_gains.models.workout_plan import (
    WorkoutDay,
    WorkoutDifficulty,
    WorkoutExercise,
    WorkoutGoal,
    WorkoutPlan,
    WorkoutType,
    WorkoutWeek,
)
from halal_gains.services import chat


def seed_demo_data(db: Session) -> None:
    existing = db.query(User).filter(User.email == "coach@halalgains.com").first()
    if existing:
        return
    coach_user = User(
        email="coach@halalgains.com",
        full_name="Yusuf Rahman",
        hashed_password=get_password_hash("password123"),
    )
    client_user = User(
        email="client@halalgains.com",
        full_name="Amina Khan",
        hashed_password=get_password_hash("password123"),
    )
    db.add_all([coach_user, client_user])
    db.flush()

    coach = CoachProfile(
        user_id=coach_user.id,
        full_name="Yusuf Rahman",
        bio="Strength coach focused on training around prayer times and fasting.",
        specialties=["strength", "ramadan training"],
        years_of_experience=8,
        profile_photos=[get_settings().coach_photo_urls[0]],
        rating=4.8,
    )
    db.add(coach)
    db.flush()

    client = ClientProfile(
        user_id=client_user.id,
        full_name="Amina Khan",
        age=29,
        location="Birmingham",
        gender=Gender.FEMALE,
        fitness_level=FitnessLevel.HEALTHY,
        fitness_goal=FitnessGoal.LOSE_WEIGHT,
        coach_id=coach.id,
    )
    db.add(client)
    db.flush()

    db.add(
        MealPlan(
            coach_id=coach.id,
            client_id=client.id,
            name="Ramadan Cut",
            description="Suhoor and iftar focused plan",
            calories_target=1800,
            protein_target_g=130,
            carbs_target_g=170,
            fats_target_g=60,
            ramadan_mode=True,
        )
    )

    plan = WorkoutPlan(
        coach_id=coach.id,
        client_id=client.id,
        name="Beginner Full Body Program",
        description="A balanced full body workout plan for beginners",
        duration="4 weeks",
        goal=WorkoutGoal.WEIGHT_LOSS,
        difficulty=WorkoutDifficulty.BEGINNER,
    )
    db.add(plan)
    db.flush()
    week = WorkoutWeek(workout_plan_id=plan.id, week_number=1)
    db.add(week)
    db.flush()
    day = WorkoutDay(
        workout_week_id=week.id,
        day_of_week=1,
        workout_type=WorkoutType.STRENGTH,
        prayer_time_notes="Train after Asr",
    )
    db.add(day)
    db.flush()
    db.add_all(
        [
            WorkoutExercise(workout_day_id=day.id, exercise_name="Goblet Squat", sets=3, reps=12, rest_period_seconds=60, exercise_order=0),
            WorkoutExercise(workout_day_id=day.id, exercise_name="Push-up", sets=3, reps=10, rest_period_seconds=60, exercise_order=1),
            WorkoutExercise(workout_day_id=day.id, exercise_name="Dumbbell Row", sets=3, reps=12, rest_period_seconds=60, exercise_order=2),
        ]
    )

    db.add_all(
        [
            HydrationReminder(user_id=client_user.id, reminder_time=time(4, 30), reminder_message="Drink water before suhoor ends"),
            HydrationReminder(user_id=client_user.id, reminder_time=time(19, 15), reminder_message="Rehydrate after iftar"),
        ]
    )
    db.commit()

    conversation, _ = chat.open_conversation(db, coach.id, client_user.id)
    chat.send_message(db, conversation, client_user.id, "Assalamu alaikum coach, ready to start!")


def main() -> None:
    engine = create_db_engine(get_settings().database_url)
    with create_session_factory(engine)() as session:
        seed_demo_data(session)
    print("Seeded demo data.")


if __name__ == "__main__":
    main()
