from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from halal_gains.api import deps
from halal_gains.db.session import get_db
from halal_gains.models.workout_plan import WorkoutPlan
from halal_gains.schemas.workout_plan import (
    ExerciseCompletionPublic,
    ExerciseCompletionUpdate,
    WorkoutDayCompletionPublic,
    WorkoutDayCreate,
    WorkoutDayLog,
    WorkoutDayPublic,
    WorkoutExerciseCreate,
    WorkoutExercisePublic,
    WorkoutPlanCreate,
    WorkoutPlanDetail,
    WorkoutPlanPublic,
    WorkoutPlanUpdate,
    WorkoutWeekCompletionPublic,
    WorkoutWeekCreate,
    WorkoutWeekPublic,
)
from halal_gains.services import workout_plans as workout_service
from halal_gains.services.accounts import Viewer
from halal_gains.services.workout_plans import PlanProgress

router = APIRouter()

UNKNOWN_CLIENT = "Unknown Client"


def _serialize_plan(plan: WorkoutPlan, progress: PlanProgress | None = None) -> dict:
    data = {column.name: getattr(plan, column.name) for column in WorkoutPlan.__table__.columns}
    if plan.client_id is not None:
        client = plan.client
        data["client_name"] = client.full_name if client else UNKNOWN_CLIENT
        data["client_photo"] = client.profile_photo if client else None
    if progress is not None:
        data["total_weeks"] = progress.total_weeks
        data["completed_weeks"] = progress.completed_weeks
    return data


@router.get("/", response_model=list[WorkoutPlanPublic])
def list_workout_plans(
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> list[WorkoutPlanPublic]:
    plans = workout_service.list_workout_plans(db, viewer)
    # Progress only means something to the client following the plan
    progress = {} if viewer.is_coach else workout_service.progress_for(db, plans, viewer.user.id)
    return [WorkoutPlanPublic(**_serialize_plan(plan, progress.get(plan.id))) for plan in plans]


@router.post("/", response_model=WorkoutPlanPublic, status_code=status.HTTP_201_CREATED)
def create_workout_plan(
    payload: WorkoutPlanCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> WorkoutPlanPublic:
    plan = workout_service.create_workout_plan(db, viewer, payload.dict())
    return WorkoutPlanPublic(**_serialize_plan(plan))


@router.get("/{plan_id}", response_model=WorkoutPlanDetail)
def read_workout_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> WorkoutPlanDetail:
    plan = workout_service.get_workout_plan(db, plan_id, viewer)
    progress = None
    if not viewer.is_coach:
        progress = workout_service.progress_for(db, [plan], viewer.user.id)[plan.id]
    return WorkoutPlanDetail(
        **_serialize_plan(plan, progress),
        weeks=[WorkoutWeekPublic.model_validate(week) for week in plan.weeks],
    )


@router.put("/{plan_id}", response_model=WorkoutPlanPublic)
def update_workout_plan(
    plan_id: int,
    payload: WorkoutPlanUpdate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> WorkoutPlanPublic:
    plan = workout_service.update_workout_plan(
        db, plan_id, viewer, payload.dict(exclude_unset=True)
    )
    return WorkoutPlanPublic(**_serialize_plan(plan))


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> None:
    workout_service.delete_workout_plan(db, plan_id, viewer)


@router.post(
    "/{plan_id}/weeks",
    response_model=WorkoutWeekPublic,
    status_code=status.HTTP_201_CREATED,
)
def add_week(
    plan_id: int,
    payload: WorkoutWeekCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> WorkoutWeekPublic:
    week = workout_service.add_week(db, plan_id, viewer, payload.week_number)
    return WorkoutWeekPublic.model_validate(week)


@router.post(
    "/{plan_id}/weeks/{week_number}/complete",
    response_model=WorkoutWeekCompletionPublic,
)
def complete_week(
    plan_id: int,
    week_number: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> WorkoutWeekCompletionPublic:
    return workout_service.complete_week(db, plan_id, viewer, week_number)


@router.delete("/weeks/{week_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_week(
    week_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> None:
    workout_service.delete_week(db, week_id, viewer)


@router.post(
    "/weeks/{week_id}/days",
    response_model=WorkoutDayPublic,
    status_code=status.HTTP_201_CREATED,
)
def add_day(
    week_id: int,
    payload: WorkoutDayCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> WorkoutDayPublic:
    day = workout_service.add_day(db, week_id, viewer, payload.dict())
    return WorkoutDayPublic.model_validate(day)


@router.delete("/days/{day_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_day(
    day_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> None:
    workout_service.delete_day(db, day_id, viewer)


@router.post(
    "/days/{day_id}/exercises",
    response_model=WorkoutExercisePublic,
    status_code=status.HTTP_201_CREATED,
)
def add_exercise(
    day_id: int,
    payload: WorkoutExerciseCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> WorkoutExercisePublic:
    return workout_service.add_exercise(db, day_id, viewer, payload.dict())


@router.delete("/exercises/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(
    exercise_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> None:
    workout_service.delete_exercise(db, exercise_id, viewer)


@router.get("/days/{day_id}/completion", response_model=WorkoutDayCompletionPublic | None)
def read_day_completion(
    day_id: int,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> WorkoutDayCompletionPublic | None:
    return workout_service.get_day_completion(db, day_id, viewer)


@router.put("/days/{day_id}/completion", response_model=WorkoutDayCompletionPublic)
def log_day(
    day_id: int,
    payload: WorkoutDayLog,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> WorkoutDayCompletionPublic:
    return workout_service.log_day(
        db,
        day_id,
        viewer,
        notes=payload.notes,
        rating=payload.rating,
        exercises=[entry.dict() for entry in payload.exercises],
    )


@router.put("/exercises/{exercise_id}/completion", response_model=ExerciseCompletionPublic)
def set_exercise_completion(
    exercise_id: int,
    payload: ExerciseCompletionUpdate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> ExerciseCompletionPublic:
    return workout_service.set_exercise_completed(db, exercise_id, viewer, payload.completed)
