from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from halal_gains.api import deps
from halal_gains.db.session import get_db
from halal_gains.models.meal_plan import MealPlan
from halal_gains.schemas.meal_plan import (
    MealPlanCreate,
    MealPlanDayCompletionPublic,
    MealPlanDayCompletionUpdate,
    MealPlanDayCreate,
    MealPlanDayPublic,
    MealPlanDetail,
    MealPlanPublic,
    MealPlanUpdate,
    MealPlanWeekCompletionCreate,
    MealPlanWeekCompletionPublic,
)
from halal_gains.services import meal_plans as meal_plan_service
from halal_gains.services.accounts import Viewer

router = APIRouter()

UNKNOWN_CLIENT = "Unknown Client"


def _serialize_plan(plan: MealPlan) -> dict:
    data = {column.name: getattr(plan, column.name) for column in MealPlan.__table__.columns}
    if plan.client_id is not None:
        client = plan.client
        data["client_name"] = client.full_name if client else UNKNOWN_CLIENT
        data["client_photo"] = client.profile_photo if client else None
    return data


@router.get("/", response_model=list[MealPlanPublic])
def list_meal_plans(
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> list[MealPlanPublic]:
    return [
        MealPlanPublic(**_serialize_plan(plan))
        for plan in meal_plan_service.list_meal_plans(db, viewer)
    ]


@router.post("/", response_model=MealPlanPublic, status_code=status.HTTP_201_CREATED)
def create_meal_plan(
    payload: MealPlanCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> MealPlanPublic:
    plan = meal_plan_service.create_meal_plan(db, viewer, payload.dict())
    return MealPlanPublic(**_serialize_plan(plan))


@router.get("/{plan_id}", response_model=MealPlanDetail)
def read_meal_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> MealPlanDetail:
    plan = meal_plan_service.get_meal_plan(db, plan_id, viewer)
    if viewer.is_coach:
        done, weeks = set(), []
    else:
        done = meal_plan_service.completed_day_ids(db, plan, viewer.user.id)
        weeks = meal_plan_service.list_week_completions(db, plan, viewer.user.id)
    days = []
    for day in plan.days:
        public = MealPlanDayPublic.model_validate(day)
        public.completed = day.id in done
        days.append(public)
    return MealPlanDetail(
        **_serialize_plan(plan),
        days=days,
        week_completions=[MealPlanWeekCompletionPublic.model_validate(week) for week in weeks],
    )


@router.put("/{plan_id}", response_model=MealPlanPublic)
def update_meal_plan(
    plan_id: int,
    payload: MealPlanUpdate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> MealPlanPublic:
    plan = meal_plan_service.update_meal_plan(
        db, plan_id, viewer, payload.dict(exclude_unset=True)
    )
    return MealPlanPublic(**_serialize_plan(plan))


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> None:
    meal_plan_service.delete_meal_plan(db, plan_id, viewer)


@router.post(
    "/{plan_id}/days",
    response_model=MealPlanDayPublic,
    status_code=status.HTTP_201_CREATED,
)
def add_meal_plan_day(
    plan_id: int,
    payload: MealPlanDayCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> MealPlanDayPublic:
    day = meal_plan_service.add_day(
        db,
        plan_id,
        viewer,
        day_number=payload.day_number,
        day_name=payload.day_name,
        meals=[meal.dict() for meal in payload.meals],
    )
    return MealPlanDayPublic.model_validate(day)


@router.post(
    "/{plan_id}/weeks/{week_number}/complete",
    response_model=MealPlanWeekCompletionPublic,
)
def complete_meal_plan_week(
    plan_id: int,
    week_number: int,
    payload: MealPlanWeekCompletionCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> MealPlanWeekCompletionPublic:
    return meal_plan_service.complete_week(db, plan_id, viewer, week_number, payload.weight_kg)


@router.delete("/days/{day_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_plan_day(
    day_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> None:
    meal_plan_service.delete_day(db, day_id, viewer)


@router.put("/days/{day_id}/completion", response_model=MealPlanDayCompletionPublic)
def set_meal_plan_day_completion(
    day_id: int,
    payload: MealPlanDayCompletionUpdate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> MealPlanDayCompletionPublic:
    completion = meal_plan_service.set_day_completed(db, day_id, viewer, payload.completed)
    return MealPlanDayCompletionPublic(
        meal_plan_day_id=day_id,
        completed=completion is not None,
        completed_at=completion.completed_at if completion else None,
    )


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(
    meal_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> None:
    meal_plan_service.delete_meal(db, meal_id, viewer)


@router.delete("/foods/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_food(
    food_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> None:
    meal_plan_service.delete_food(db, food_id, viewer)
