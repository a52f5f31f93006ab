from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from halal_gains.api import deps
from halal_gains.db.session import get_db
from halal_gains.models.user import User
from halal_gains.schemas.hydration import (
    HydrationReminderCreate,
    HydrationReminderPublic,
    HydrationReminderUpdate,
)
from halal_gains.services import hydration

router = APIRouter()


@router.get("/", response_model=list[HydrationReminderPublic])
def list_reminders(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> list[HydrationReminderPublic]:
    return hydration.list_reminders(db, current_user)


@router.post("/", response_model=HydrationReminderPublic, status_code=status.HTTP_201_CREATED)
def create_reminder(
    payload: HydrationReminderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> HydrationReminderPublic:
    return hydration.create_reminder(db, current_user, payload.dict())


@router.put("/{reminder_id}", response_model=HydrationReminderPublic)
def update_reminder(
    reminder_id: int,
    payload: HydrationReminderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> HydrationReminderPublic:
    return hydration.update_reminder(
        db, reminder_id, current_user, payload.dict(exclude_unset=True)
    )


@router.post("/{reminder_id}/toggle", response_model=HydrationReminderPublic)
def toggle_reminder(
    reminder_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> HydrationReminderPublic:
    return hydration.toggle_reminder(db, reminder_id, current_user)


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reminder(
    reminder_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> None:
    hydration.delete_reminder(db, reminder_id, current_user)
