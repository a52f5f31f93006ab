from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from halal_gains.models.profile import ClientProfile, CoachProfile
from halal_gains.models.workout_plan import (
    ExerciseCompletion,
    WorkoutDay,
    WorkoutDayCompletion,
    WorkoutExercise,
    WorkoutPlan,
    WorkoutWeek,
    WorkoutWeekCompletion,
)
from halal_gains.services.accounts import Viewer
from halal_gains.services.exceptions import Conflict, PermissionDenied, RecordNotFound


@dataclass
class PlanProgress:
    total_weeks: int = 0
    completed_weeks: int = 0


def list_workout_plans(db: Session, viewer: Viewer) -> list[WorkoutPlan]:
    query = db.query(WorkoutPlan)
    if viewer.is_coach:
        query = query.filter(WorkoutPlan.coach_id == viewer.coach_profile.id)
    elif viewer.client_profile is not None:
        query = query.filter(WorkoutPlan.client_id == viewer.client_profile.id)
    else:
        return []
    return query.order_by(WorkoutPlan.created_at.desc(), WorkoutPlan.id.desc()).all()


def progress_for(db: Session, plans: list[WorkoutPlan], user_id: int) -> dict[int, PlanProgress]:
    """Week totals and the user's completed weeks, fetched in two queries for all plans."""
    plan_ids = [plan.id for plan in plans]
    if not plan_ids:
        return {}
    totals = dict(
        db.query(WorkoutWeek.workout_plan_id, func.count(WorkoutWeek.id))
        .filter(WorkoutWeek.workout_plan_id.in_(plan_ids))
        .group_by(WorkoutWeek.workout_plan_id)
        .all()
    )
    completed = Counter(
        plan_id
        for (plan_id,) in db.query(WorkoutWeekCompletion.workout_plan_id)
        .filter(
            WorkoutWeekCompletion.workout_plan_id.in_(plan_ids),
            WorkoutWeekCompletion.user_id == user_id,
        )
        .all()
    )
    return {
        plan_id: PlanProgress(totals.get(plan_id, 0), completed.get(plan_id, 0))
        for plan_id in plan_ids
    }


def get_workout_plan(db: Session, plan_id: int, viewer: Viewer) -> WorkoutPlan:
    plan = db.get(WorkoutPlan, plan_id)
    visible = plan is not None and (
        (viewer.is_coach and plan.coach_id == viewer.coach_profile.id)
        or (
            not viewer.is_coach
            and viewer.client_profile is not None
            and plan.client_id == viewer.client_profile.id
        )
    )
    if not visible:
        raise RecordNotFound("Workout plan not found")
    return plan


def _require_coach(viewer: Viewer) -> CoachProfile:
    if not viewer.is_coach:
        raise PermissionDenied("Only coaches can edit workout plans")
    return viewer.coach_profile


def _check_client(db: Session, client_id: int | None) -> None:
    if client_id is not None and db.get(ClientProfile, client_id) is None:
        raise RecordNotFound("Client not found")


def create_workout_plan(db: Session, viewer: Viewer, data: dict[str, Any]) -> WorkoutPlan:
    coach = _require_coach(viewer)
    _check_client(db, data.get("client_id"))
    plan = WorkoutPlan(coach_id=coach.id, **data)
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def update_workout_plan(
    db: Session, plan_id: int, viewer: Viewer, data: dict[str, Any]
) -> WorkoutPlan:
    _require_coach(viewer)
    plan = get_workout_plan(db, plan_id, viewer)
    if "client_id" in data:
        _check_client(db, data["client_id"])
    for key, value in data.items():
        setattr(plan, key, value)
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def delete_workout_plan(db: Session, plan_id: int, viewer: Viewer) -> None:
    _require_coach(viewer)
    plan = get_workout_plan(db, plan_id, viewer)
    db.delete(plan)
    db.commit()


def add_week(db: Session, plan_id: int, viewer: Viewer, week_number: int) -> WorkoutWeek:
    _require_coach(viewer)
    plan = get_workout_plan(db, plan_id, viewer)
    week = WorkoutWeek(workout_plan_id=plan.id, week_number=week_number)
    try:
        with db.begin_nested():
            db.add(week)
    except IntegrityError as exc:
        raise Conflict(f"Week {week_number} already exists") from exc
    db.commit()
    db.refresh(week)
    return week


def _get_week(db: Session, week_id: int, viewer: Viewer) -> WorkoutWeek:
    week = db.get(WorkoutWeek, week_id)
    if week is None:
        raise RecordNotFound("Week not found")
    get_workout_plan(db, week.workout_plan_id, viewer)
    return week


def _get_day(db: Session, day_id: int, viewer: Viewer) -> WorkoutDay:
    day = db.get(WorkoutDay, day_id)
    if day is None:
        raise RecordNotFound("Day not found")
    _get_week(db, day.workout_week_id, viewer)
    return day


def delete_week(db: Session, week_id: int, viewer: Viewer) -> None:
    _require_coach(viewer)
    db.delete(_get_week(db, week_id, viewer))
    db.commit()


def add_day(db: Session, week_id: int, viewer: Viewer, data: dict[str, Any]) -> WorkoutDay:
    _require_coach(viewer)
    week = _get_week(db, week_id, viewer)
    day = WorkoutDay(workout_week_id=week.id, **data)
    db.add(day)
    db.commit()
    db.refresh(day)
    return day


def delete_day(db: Session, day_id: int, viewer: Viewer) -> None:
    _require_coach(viewer)
    db.delete(_get_day(db, day_id, viewer))
    db.commit()


def add_exercise(
    db: Session, day_id: int, viewer: Viewer, data: dict[str, Any]
) -> WorkoutExercise:
    _require_coach(viewer)
    day = _get_day(db, day_id, viewer)
    last_order = (
        db.query(func.max(WorkoutExercise.exercise_order))
        .filter(WorkoutExercise.workout_day_id == day.id)
        .scalar()
    )
    exercise = WorkoutExercise(
        workout_day_id=day.id,
        exercise_order=0 if last_order is None else last_order + 1,
        **data,
    )
    db.add(exercise)
    db.commit()
    db.refresh(exercise)
    return exercise


def delete_exercise(db: Session, exercise_id: int, viewer: Viewer) -> None:
    _require_coach(viewer)
    exercise = db.get(WorkoutExercise, exercise_id)
    if exercise is None:
        raise RecordNotFound("Exercise not found")
    _get_day(db, exercise.workout_day_id, viewer)
    db.delete(exercise)
    db.commit()


def complete_week(
    db: Session, plan_id: int, viewer: Viewer, week_number: int
) -> WorkoutWeekCompletion:
    if viewer.is_coach:
        raise PermissionDenied("Only the assigned client can complete weeks")
    plan = get_workout_plan(db, plan_id, viewer)
    exists = (
        db.query(WorkoutWeek.id)
        .filter(WorkoutWeek.workout_plan_id == plan.id, WorkoutWeek.week_number == week_number)
        .first()
    )
    if not exists:
        raise RecordNotFound("Week not found")
    completion = (
        db.query(WorkoutWeekCompletion)
        .filter(
            WorkoutWeekCompletion.workout_plan_id == plan.id,
            WorkoutWeekCompletion.user_id == viewer.user.id,
            WorkoutWeekCompletion.week_number == week_number,
        )
        .first()
    )
    if completion:
        return completion
    completion = WorkoutWeekCompletion(
        workout_plan_id=plan.id, user_id=viewer.user.id, week_number=week_number
    )
    db.add(completion)
    db.commit()
    db.refresh(completion)
    return completion


def _find_day_completion(db: Session, day_id: int, user_id: int) -> WorkoutDayCompletion | None:
    return (
        db.query(WorkoutDayCompletion)
        .filter(
            WorkoutDayCompletion.workout_day_id == day_id,
            WorkoutDayCompletion.user_id == user_id,
        )
        .first()
    )


def _day_completion_for(db: Session, day: WorkoutDay, user_id: int) -> WorkoutDayCompletion:
    completion = _find_day_completion(db, day.id, user_id)
    if completion is not None:
        return completion
    completion = WorkoutDayCompletion(workout_day_id=day.id, user_id=user_id)
    try:
        with db.begin_nested():
            db.add(completion)
    except IntegrityError:
        # A concurrent request logged the day first
        completion = _find_day_completion(db, day.id, user_id)
    return completion


def get_day_completion(db: Session, day_id: int, viewer: Viewer) -> WorkoutDayCompletion | None:
    day = _get_day(db, day_id, viewer)
    return _find_day_completion(db, day.id, viewer.user.id)


def log_day(
    db: Session,
    day_id: int,
    viewer: Viewer,
    *,
    notes: str | None,
    rating: int | None,
    exercises: list[dict[str, Any]],
) -> WorkoutDayCompletion:
    """Record the client's session for a day.

    Logging the same day again updates the notes and rating and replaces the
    per-exercise entries with the ones given.
    """
    if viewer.is_coach:
        raise PermissionDenied("Only the assigned client can log workouts")
    day = _get_day(db, day_id, viewer)
    known = {exercise.id for exercise in day.exercises}
    entries = {}
    for entry in exercises:
        if entry["workout_exercise_id"] not in known:
            raise RecordNotFound("Exercise not found")
        entries[entry["workout_exercise_id"]] = entry

    completion = _day_completion_for(db, day, viewer.user.id)
    completion.notes = notes or None
    completion.rating = rating or None
    completion.updated_at = datetime.utcnow()
    completion.exercise_completions.clear()
    db.flush()
    completion.exercise_completions.extend(
        ExerciseCompletion(**entry) for entry in entries.values()
    )
    db.commit()
    db.refresh(completion)
    return completion


def set_exercise_completed(
    db: Session, exercise_id: int, viewer: Viewer, completed: bool
) -> ExerciseCompletion:
    """Tick an exercise on or off, logging its day first if needed."""
    if viewer.is_coach:
        raise PermissionDenied("Only the assigned client can log workouts")
    exercise = db.get(WorkoutExercise, exercise_id)
    if exercise is None:
        raise RecordNotFound("Exercise not found")
    day = _get_day(db, exercise.workout_day_id, viewer)
    completion = _day_completion_for(db, day, viewer.user.id)
    entry = next(
        (e for e in completion.exercise_completions if e.workout_exercise_id == exercise.id),
        None,
    )
    if entry is None:
        entry = ExerciseCompletion(workout_exercise_id=exercise.id, completed=completed)
        completion.exercise_completions.append(entry)
    else:
        entry.completed = completed
    db.commit()
    db.refresh(entry)
    return entry
