from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from halal_gains.models.conversation import Conversation
from halal_gains.models.profile import ClientProfile, CoachProfile
from halal_gains.models.user import User
from halal_gains.services.exceptions import (
    CoachNotFound,
    PermissionDenied,
    ProfileNotFound,
)


def get_coach_profile(db: Session, user_id: int) -> CoachProfile:
    profile = db.query(CoachProfile).filter(CoachProfile.user_id == user_id).first()
    if not profile:
        raise ProfileNotFound("Coach profile not found")
    return profile


def get_client_profile(db: Session, user_id: int) -> ClientProfile:
    profile = db.query(ClientProfile).filter(ClientProfile.user_id == user_id).first()
    if not profile:
        raise ProfileNotFound("Client profile not found")
    return profile


def get_coach(db: Session, coach_id: int) -> CoachProfile:
    coach = db.get(CoachProfile, coach_id)
    if not coach:
        raise CoachNotFound()
    return coach


def list_coaches(db: Session) -> list[CoachProfile]:
    return (
        db.query(CoachProfile)
        .order_by(CoachProfile.rating.desc().nulls_last(), CoachProfile.full_name.asc())
        .all()
    )


def clients_by_user_id(db: Session, user_ids: set[int]) -> dict[int, ClientProfile]:
    if not user_ids:
        return {}
    rows = db.query(ClientProfile).filter(ClientProfile.user_id.in_(user_ids)).all()
    return {row.user_id: row for row in rows}


def clients_by_id(db: Session, profile_ids: set[int]) -> dict[int, ClientProfile]:
    if not profile_ids:
        return {}
    rows = db.query(ClientProfile).filter(ClientProfile.id.in_(profile_ids)).all()
    return {row.id: row for row in rows}


def list_clients_for_coach(db: Session, coach: CoachProfile) -> list[ClientProfile]:
    """Clients assigned to the coach plus clients who have opened a chat with them."""
    chatting = db.query(Conversation.client_id).filter(Conversation.coach_id == coach.id)
    return (
        db.query(ClientProfile)
        .filter(
            or_(
                ClientProfile.coach_id == coach.id,
                ClientProfile.user_id.in_(chatting),
            )
        )
        .order_by(ClientProfile.full_name.asc())
        .all()
    )


def save_client_profile(db: Session, user: User, data: dict[str, Any]) -> ClientProfile:
    if db.query(CoachProfile).filter(CoachProfile.user_id == user.id).first():
        raise PermissionDenied("Coach accounts cannot hold a client profile")
    profile = db.query(ClientProfile).filter(ClientProfile.user_id == user.id).first()
    if profile is None:
        profile = ClientProfile(user_id=user.id, **data)
    else:
        for key, value in data.items():
            setattr(profile, key, value)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def save_coach_profile(db: Session, user: User, data: dict[str, Any]) -> CoachProfile:
    if db.query(ClientProfile).filter(ClientProfile.user_id == user.id).first():
        raise PermissionDenied("Client accounts cannot hold a coach profile")
    profile = db.query(CoachProfile).filter(CoachProfile.user_id == user.id).first()
    if profile is None:
        profile = CoachProfile(user_id=user.id, **data)
    else:
        for key, value in data.items():
            setattr(profile, key, value)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile
