from typing import Any

from sqlalchemy.orm import Session

from halal_gains.models.hydration_reminder import HydrationReminder
from halal_gains.models.user import User
from halal_gains.services.exceptions import RecordNotFound


def list_reminders(db: Session, user: User) -> list[HydrationReminder]:
    return (
        db.query(HydrationReminder)
        .filter(HydrationReminder.user_id == user.id)
        .order_by(HydrationReminder.reminder_time.asc())
        .all()
    )


def get_reminder(db: Session, reminder_id: int, user: User) -> HydrationReminder:
    reminder = (
        db.query(HydrationReminder)
        .filter(HydrationReminder.id == reminder_id, HydrationReminder.user_id == user.id)
        .first()
    )
    if not reminder:
        raise RecordNotFound("Reminder not found")
    return reminder


def create_reminder(db: Session, user: User, data: dict[str, Any]) -> HydrationReminder:
    reminder = HydrationReminder(user_id=user.id, **data)
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def update_reminder(
    db: Session, reminder_id: int, user: User, data: dict[str, Any]
) -> HydrationReminder:
    reminder = get_reminder(db, reminder_id, user)
    for key, value in data.items():
        setattr(reminder, key, value)
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def toggle_reminder(db: Session, reminder_id: int, user: User) -> HydrationReminder:
    reminder = get_reminder(db, reminder_id, user)
    reminder.is_active = not reminder.is_active
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def delete_reminder(db: Session, reminder_id: int, user: User) -> None:
    reminder = get_reminder(db, reminder_id, user)
    db.delete(reminder)
    db.commit()
