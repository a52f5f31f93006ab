from datetime import datetime, time

from pydantic import BaseModel


class HydrationReminderBase(BaseModel):
    reminder_time: time
    reminder_message: str | None = None
    is_active: bool = True
    ramadan_only: bool = True


class HydrationReminderCreate(HydrationReminderBase):
    pass


class HydrationReminderUpdate(BaseModel):
    reminder_time: time | None = None
    reminder_message: str | None = None
    is_active: bool | None = None
    ramadan_only: bool | None = None


class HydrationReminderPublic(HydrationReminderBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
