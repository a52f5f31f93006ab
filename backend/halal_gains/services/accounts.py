from dataclasses import dataclass
from enum import Enum as PyEnum

from sqlalchemy.orm import Session

from halal_gains.core.security import get_password_hash, verify_password
from halal_gains.models.profile import ClientProfile, CoachProfile
from halal_gains.models.user import User


class Role(str, PyEnum):
    COACH = "coach"
    CLIENT = "client"


@dataclass
class Viewer:
    """The signed-in account together with the role it acts in."""

    user: User
    role: Role
    coach_profile: CoachProfile | None = None
    client_profile: ClientProfile | None = None

    @property
    def is_coach(self) -> bool:
        return self.role is Role.COACH


def resolve_viewer(db: Session, user: User) -> Viewer:
    # An account is a coach exactly when it owns a coach profile row
    coach = db.query(CoachProfile).filter(CoachProfile.user_id == user.id).first()
    if coach:
        return Viewer(user=user, role=Role.COACH, coach_profile=coach)
    client = db.query(ClientProfile).filter(ClientProfile.user_id == user.id).first()
    return Viewer(user=user, role=Role.CLIENT, client_profile=client)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def create_account(
    db: Session, *, email: str, password: str, full_name: str | None = None
) -> User:
    user = User(
        email=email,
        full_name=full_name,
        hashed_password=get_password_hash(password),
    )
    db.add(user)
    db.flush()
    return user
