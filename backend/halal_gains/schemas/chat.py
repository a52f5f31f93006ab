from datetime import datetime
from typing import Any

from pydantic import BaseModel


class ConversationOpen(BaseModel):
    coach_id: int


class ConversationPublic(BaseModel):
    id: int
    coach_id: int
    client_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ConversationSummary(ConversationPublic):
    other_user_name: str
    other_user_photo: str | None = None
    last_message: str | None = None
    unread_count: int = 0


class MessageCreate(BaseModel):
    content: str


class MessagePublic(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class MarkReadResponse(BaseModel):
    updated: int


class LiveEnvelope(BaseModel):
    """Frame sent over the conversation websocket."""
    type: str  # subscribed | message.created | pong | error
    data: dict[str, Any] = {}
