from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from halal_gains.api import deps
from halal_gains.db.session import get_db
from halal_gains.models.user import User
from halal_gains.schemas.profile import ClientProfilePublic, CoachProfilePublic
from halal_gains.services import profiles
from halal_gains.services.accounts import Viewer

router = APIRouter()


@router.get("/", response_model=list[CoachProfilePublic])
def browse_coaches(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> list[CoachProfilePublic]:
    return profiles.list_coaches(db)


@router.get("/me/clients", response_model=list[ClientProfilePublic])
def list_my_clients(
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_coach_viewer),
) -> list[ClientProfilePublic]:
    return profiles.list_clients_for_coach(db, viewer.coach_profile)


@router.get("/{coach_id}", response_model=CoachProfilePublic)
def read_coach(
    coach_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> CoachProfilePublic:
    return profiles.get_coach(db, coach_id)
