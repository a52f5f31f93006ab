import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from halal_gains.models.meal_plan import (
    MealPlan,
    MealPlanDay,
    MealPlanDayCompletion,
    MealPlanFood,
    MealPlanMeal,
    MealPlanWeekCompletion,
)
from halal_gains.models.profile import ClientProfile, CoachProfile
from halal_gains.services.accounts import Viewer
from halal_gains.services.exceptions import PermissionDenied, RecordNotFound

logger = logging.getLogger(__name__)


def list_meal_plans(db: Session, viewer: Viewer) -> list[MealPlan]:
    query = db.query(MealPlan)
    if viewer.is_coach:
        query = query.filter(MealPlan.coach_id == viewer.coach_profile.id)
    elif viewer.client_profile is not None:
        query = query.filter(MealPlan.client_id == viewer.client_profile.id)
    else:
        return []
    return query.order_by(MealPlan.created_at.desc(), MealPlan.id.desc()).all()


def get_meal_plan(db: Session, plan_id: int, viewer: Viewer) -> MealPlan:
    plan = db.get(MealPlan, plan_id)
    visible = plan is not None and (
        (viewer.is_coach and plan.coach_id == viewer.coach_profile.id)
        or (
            not viewer.is_coach
            and viewer.client_profile is not None
            and plan.client_id == viewer.client_profile.id
        )
    )
    if not visible:
        raise RecordNotFound("Meal plan not found")
    return plan


def _require_coach(viewer: Viewer) -> CoachProfile:
    if not viewer.is_coach:
        raise PermissionDenied("Only coaches can manage meal plans")
    return viewer.coach_profile


def _check_client(db: Session, client_id: int | None) -> None:
    if client_id is not None and db.get(ClientProfile, client_id) is None:
        raise RecordNotFound("Client not found")


def create_meal_plan(db: Session, viewer: Viewer, data: dict[str, Any]) -> MealPlan:
    coach = _require_coach(viewer)
    _check_client(db, data.get("client_id"))
    plan = MealPlan(coach_id=coach.id, **data)
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def update_meal_plan(
    db: Session, plan_id: int, viewer: Viewer, data: dict[str, Any]
) -> MealPlan:
    _require_coach(viewer)
    plan = get_meal_plan(db, plan_id, viewer)
    if "client_id" in data:
        _check_client(db, data["client_id"])
    for key, value in data.items():
        setattr(plan, key, value)
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def delete_meal_plan(db: Session, plan_id: int, viewer: Viewer) -> None:
    _require_coach(viewer)
    plan = get_meal_plan(db, plan_id, viewer)
    db.delete(plan)
    db.commit()


def add_day(
    db: Session,
    plan_id: int,
    viewer: Viewer,
    *,
    day_number: int,
    day_name: str | None,
    meals: list[dict[str, Any]],
) -> MealPlanDay:
    """Append meals (and their foods) to a day of the plan, creating the day if needed."""
    _require_coach(viewer)
    plan = get_meal_plan(db, plan_id, viewer)
    day = (
        db.query(MealPlanDay)
        .filter(MealPlanDay.meal_plan_id == plan.id, MealPlanDay.day_number == day_number)
        .first()
    )
    if day is None:
        day = MealPlanDay(meal_plan_id=plan.id, day_number=day_number, day_name=day_name)
        db.add(day)
        db.flush()
    elif day_name and not day.day_name:
        day.day_name = day_name

    for meal_data in meals:
        foods = meal_data.get("foods") or []
        meal = MealPlanMeal(
            meal_plan_day_id=day.id,
            meal_type=meal_data["meal_type"],
            meal_name=meal_data.get("meal_name"),
            description=meal_data.get("description"),
            total_calories=meal_data.get("total_calories"),
        )
        db.add(meal)
        db.flush()
        db.add_all(
            MealPlanFood(
                meal_plan_meal_id=meal.id,
                food_name=food["food_name"],
                serving_size=food.get("serving_size"),
                quantity=food.get("quantity"),
                calories=food.get("calories"),
                food_order=index,
            )
            for index, food in enumerate(foods)
        )
    db.commit()
    db.refresh(day)
    return day


def _get_day(db: Session, day_id: int, viewer: Viewer) -> MealPlanDay:
    day = db.get(MealPlanDay, day_id)
    if day is None:
        raise RecordNotFound("Day not found")
    get_meal_plan(db, day.meal_plan_id, viewer)
    return day


def _get_meal(db: Session, meal_id: int, viewer: Viewer) -> MealPlanMeal:
    meal = db.get(MealPlanMeal, meal_id)
    if meal is None:
        raise RecordNotFound("Meal not found")
    _get_day(db, meal.meal_plan_day_id, viewer)
    return meal


def delete_day(db: Session, day_id: int, viewer: Viewer) -> None:
    _require_coach(viewer)
    db.delete(_get_day(db, day_id, viewer))
    db.commit()


def delete_meal(db: Session, meal_id: int, viewer: Viewer) -> None:
    _require_coach(viewer)
    db.delete(_get_meal(db, meal_id, viewer))
    db.commit()


def delete_food(db: Session, food_id: int, viewer: Viewer) -> None:
    _require_coach(viewer)
    food = db.get(MealPlanFood, food_id)
    if food is None:
        raise RecordNotFound("Food not found")
    _get_meal(db, food.meal_plan_meal_id, viewer)
    db.delete(food)
    db.commit()


def _require_client(viewer: Viewer) -> None:
    if viewer.is_coach:
        raise PermissionDenied("Only the assigned client can track meal plan progress")


def _find_day_completion(db: Session, day_id: int, user_id: int) -> MealPlanDayCompletion | None:
    return (
        db.query(MealPlanDayCompletion)
        .filter(
            MealPlanDayCompletion.meal_plan_day_id == day_id,
            MealPlanDayCompletion.user_id == user_id,
        )
        .first()
    )


def _mark_day(db: Session, day: MealPlanDay, user_id: int) -> MealPlanDayCompletion:
    completion = _find_day_completion(db, day.id, user_id)
    if completion is not None:
        return completion
    completion = MealPlanDayCompletion(meal_plan_day_id=day.id, user_id=user_id)
    try:
        with db.begin_nested():
            db.add(completion)
    except IntegrityError:
        completion = _find_day_completion(db, day.id, user_id)
    return completion


def completed_day_ids(db: Session, plan: MealPlan, user_id: int) -> set[int]:
    return {
        day_id
        for (day_id,) in db.query(MealPlanDayCompletion.meal_plan_day_id)
        .join(MealPlanDay, MealPlanDay.id == MealPlanDayCompletion.meal_plan_day_id)
        .filter(MealPlanDay.meal_plan_id == plan.id, MealPlanDayCompletion.user_id == user_id)
        .all()
    }


def list_week_completions(
    db: Session, plan: MealPlan, user_id: int
) -> list[MealPlanWeekCompletion]:
    return (
        db.query(MealPlanWeekCompletion)
        .filter(
            MealPlanWeekCompletion.meal_plan_id == plan.id,
            MealPlanWeekCompletion.user_id == user_id,
        )
        .order_by(MealPlanWeekCompletion.week_number)
        .all()
    )


def set_day_completed(
    db: Session, day_id: int, viewer: Viewer, completed: bool
) -> MealPlanDayCompletion | None:
    """Mark a plan day done or not done. Returns the completion, or None once cleared."""
    _require_client(viewer)
    day = _get_day(db, day_id, viewer)
    if completed:
        completion = _mark_day(db, day, viewer.user.id)
        db.commit()
        db.refresh(completion)
        return completion
    completion = _find_day_completion(db, day.id, viewer.user.id)
    if completion is not None:
        db.delete(completion)
        db.commit()
    return None


def complete_week(
    db: Session, plan_id: int, viewer: Viewer, week_number: int, weight_kg: float
) -> MealPlanWeekCompletion:
    """Finish a week of the plan and record the client's weight at that point.

    Every day of the week is marked done, the weight is stored on the week and
    copied to the client's profile. Completing a week again updates the weight.
    """
    _require_client(viewer)
    plan = get_meal_plan(db, plan_id, viewer)
    week_days = [day for day in plan.days if day.week_number == week_number]
    if not week_days:
        raise RecordNotFound("Week not found")

    for day in week_days:
        _mark_day(db, day, viewer.user.id)

    completion = (
        db.query(MealPlanWeekCompletion)
        .filter(
            MealPlanWeekCompletion.meal_plan_id == plan.id,
            MealPlanWeekCompletion.user_id == viewer.user.id,
            MealPlanWeekCompletion.week_number == week_number,
        )
        .first()
    )
    if completion is None:
        completion = MealPlanWeekCompletion(
            meal_plan_id=plan.id, user_id=viewer.user.id, week_number=week_number
        )
        db.add(completion)
    completion.weight_kg = weight_kg
    if viewer.client_profile is not None:
        viewer.client_profile.weight_kg = weight_kg
    db.commit()
    db.refresh(completion)
    logger.info(
        "User %s completed week %s of meal plan %s at %s kg",
        viewer.user.id,
        week_number,
        plan.id,
        weight_kg,
    )
    return completion
