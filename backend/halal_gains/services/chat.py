"""Coach/client conversations and their messages."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from halal_gains.models.conversation import Conversation, Message
from halal_gains.models.profile import CoachProfile
from halal_gains.models.user import User
from halal_gains.realtime.feed import INSERT, LiveFeed
from halal_gains.services import profiles
from halal_gains.services.accounts import Role, Viewer
from halal_gains.services.exceptions import (
    ConversationNotFound,
    EmptyMessage,
    NotAParticipant,
)

logger = logging.getLogger(__name__)

MESSAGES_TABLE = "messages"


@dataclass
class ConversationSummary:
    id: int
    coach_id: int
    client_id: int
    created_at: datetime
    updated_at: datetime
    other_user_name: str
    other_user_photo: str | None
    last_message: str | None
    unread_count: int


def _find_conversation(db: Session, coach_id: int, client_id: int) -> Conversation | None:
    return (
        db.query(Conversation)
        .filter(Conversation.coach_id == coach_id, Conversation.client_id == client_id)
        .first()
    )


def open_conversation(
    db: Session, coach_id: int, client_id: int
) -> tuple[Conversation, bool]:
    """Return the conversation for the pair, creating it if needed.

    The second element is True when this call created the row. Two concurrent
    callers both end up with the same row: the loser of the insert race hits
    the unique constraint and reads the winner's conversation instead.
    """
    profiles.get_coach(db, coach_id)
    existing = _find_conversation(db, coach_id, client_id)
    if existing:
        return existing, False

    conversation = Conversation(coach_id=coach_id, client_id=client_id)
    try:
        with db.begin_nested():
            db.add(conversation)
    except IntegrityError:
        logger.info(
            "Conversation for coach %s and client %s was created concurrently",
            coach_id,
            client_id,
        )
        winner = _find_conversation(db, coach_id, client_id)
        if winner is None:
            raise
        return winner, False
    db.commit()
    logger.info("Created conversation %s (coach %s, client %s)", conversation.id, coach_id, client_id)
    return conversation, True


def is_participant(db: Session, conversation: Conversation, user_id: int) -> bool:
    if conversation.client_id == user_id:
        return True
    coach_user_id = (
        db.query(CoachProfile.user_id)
        .filter(CoachProfile.id == conversation.coach_id)
        .scalar()
    )
    return coach_user_id == user_id


def get_conversation_for(db: Session, conversation_id: int, user_id: int) -> Conversation:
    conversation = db.get(Conversation, conversation_id)
    if not conversation:
        raise ConversationNotFound()
    if not is_participant(db, conversation, user_id):
        raise NotAParticipant()
    return conversation


def list_messages(db: Session, conversation_id: int) -> list[Message]:
    return (
        db.query(Message)
        .filter(Message.conversation_id == conversation_id)
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )


def send_message(
    db: Session,
    conversation: Conversation,
    sender_id: int,
    content: str,
    feed: LiveFeed | None = None,
) -> Message:
    text = (content or "").strip()
    if not text:
        raise EmptyMessage()

    message = Message(
        conversation_id=conversation.id,
        sender_id=sender_id,
        content=text,
        is_read=False,
        created_at=datetime.utcnow(),
    )
    db.add(message)
    conversation.updated_at = message.created_at
    db.add(conversation)
    db.commit()
    db.refresh(message)

    if feed is not None:
        delivered = feed.publish(MESSAGES_TABLE, INSERT, message.to_row())
        logger.debug("Message %s pushed to %s listener(s)", message.id, delivered)
    return message


def mark_read(db: Session, conversation_id: int, reader_id: int) -> int:
    updated = (
        db.query(Message)
        .filter(
            Message.conversation_id == conversation_id,
            Message.sender_id != reader_id,
            Message.is_read.is_(False),
        )
        .update({Message.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return updated


def list_conversations(db: Session, viewer: Viewer) -> list[ConversationSummary]:
    query = db.query(Conversation)
    if viewer.role is Role.COACH:
        query = query.filter(Conversation.coach_id == viewer.coach_profile.id)
    else:
        query = query.filter(Conversation.client_id == viewer.user.id)
    conversations = query.order_by(Conversation.updated_at.desc(), Conversation.id.desc()).all()
    if not conversations:
        return []

    conversation_ids = [c.id for c in conversations]
    unread = dict(
        db.query(Message.conversation_id, func.count(Message.id))
        .filter(
            Message.conversation_id.in_(conversation_ids),
            Message.is_read.is_(False),
            Message.sender_id != viewer.user.id,
        )
        .group_by(Message.conversation_id)
        .all()
    )

    if viewer.role is Role.COACH:
        clients = profiles.clients_by_user_id(db, {c.client_id for c in conversations})
        coaches = {}
    else:
        clients = {}
        coaches = {
            coach.id: coach
            for coach in db.query(CoachProfile)
            .filter(CoachProfile.id.in_({c.coach_id for c in conversations}))
            .all()
        }

    summaries = []
    for conversation in conversations:
        if viewer.role is Role.COACH:
            client = clients.get(conversation.client_id)
            name = client.full_name if client else _account_name(db, conversation.client_id, "Client")
            photo = client.profile_photo if client else None
        else:
            coach = coaches.get(conversation.coach_id)
            name = coach.full_name if coach else "Coach"
            photo = coach.photo if coach else None
        last = (
            db.query(Message.content)
            .filter(Message.conversation_id == conversation.id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(1)
            .scalar()
        )
        summaries.append(
            ConversationSummary(
                id=conversation.id,
                coach_id=conversation.coach_id,
                client_id=conversation.client_id,
                created_at=conversation.created_at,
                updated_at=conversation.updated_at,
                other_user_name=name,
                other_user_photo=photo,
                last_message=last,
                unread_count=unread.get(conversation.id, 0),
            )
        )
    return summaries


def _account_name(db: Session, user_id: int, fallback: str) -> str:
    full_name = db.query(User.full_name).filter(User.id == user_id).scalar()
    return full_name or fallback
