from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from halal_gains.api import deps
from halal_gains.db.session import get_db
from halal_gains.models.user import User
from halal_gains.schemas.profile import (
    ClientProfileBase,
    ClientProfilePublic,
    ClientProfileUpdate,
    CoachProfileBase,
    CoachProfilePublic,
    CoachProfileUpdate,
)
from halal_gains.services import profiles

router = APIRouter()


@router.get("/client", response_model=ClientProfilePublic)
def read_client_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> ClientProfilePublic:
    return profiles.get_client_profile(db, current_user.id)


@router.put("/client", response_model=ClientProfilePublic)
def save_client_profile(
    payload: ClientProfileBase,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> ClientProfilePublic:
    return profiles.save_client_profile(db, current_user, payload.dict())


@router.patch("/client", response_model=ClientProfilePublic)
def update_client_profile(
    payload: ClientProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> ClientProfilePublic:
    profiles.get_client_profile(db, current_user.id)
    return profiles.save_client_profile(
        db, current_user, payload.dict(exclude_unset=True)
    )


@router.get("/coach", response_model=CoachProfilePublic)
def read_coach_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> CoachProfilePublic:
    return profiles.get_coach_profile(db, current_user.id)


@router.put("/coach", response_model=CoachProfilePublic)
def save_coach_profile(
    payload: CoachProfileBase,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> CoachProfilePublic:
    return profiles.save_coach_profile(db, current_user, payload.dict())


@router.patch("/coach", response_model=CoachProfilePublic)
def update_coach_profile(
    payload: CoachProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> CoachProfilePublic:
    profiles.get_coach_profile(db, current_user.id)
    return profiles.save_coach_profile(
        db, current_user, payload.dict(exclude_unset=True)
    )
