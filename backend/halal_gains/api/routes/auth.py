from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from halal_gains.api import deps
from halal_gains.core.security import (
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    user_id_from_token,
)
from halal_gains.db.session import get_db
from halal_gains.models.user import User
from halal_gains.schemas import auth as auth_schema
from halal_gains.services import accounts
from halal_gains.services.accounts import Viewer

router = APIRouter()


def _token_pair(user: User) -> auth_schema.TokenPair:
    return auth_schema.TokenPair(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


@router.post("/register", response_model=auth_schema.TokenPair)
def register_user(
    payload: auth_schema.RegisterRequest,
    db: Session = Depends(get_db),
) -> auth_schema.TokenPair:
    if accounts.get_user_by_email(db, payload.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered"
        )
    user = accounts.create_account(
        db,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
    )
    db.commit()
    db.refresh(user)
    return _token_pair(user)


@router.post("/login", response_model=auth_schema.TokenPair)
def login_user(
    payload: auth_schema.LoginRequest,
    db: Session = Depends(get_db),
) -> auth_schema.TokenPair:
    user = accounts.authenticate(db, payload.email, payload.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return _token_pair(user)


@router.post("/refresh", response_model=auth_schema.TokenPair)
def refresh_token(
    payload: auth_schema.RefreshRequest,
    db: Session = Depends(get_db),
) -> auth_schema.TokenPair:
    try:
        user_id = user_id_from_token(payload.refresh_token, REFRESH_TOKEN)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        ) from exc
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return _token_pair(user)


@router.get("/me", response_model=auth_schema.SessionInfo)
def read_session(viewer: Viewer = Depends(deps.get_viewer)) -> auth_schema.SessionInfo:
    return auth_schema.SessionInfo(
        user_id=viewer.user.id,
        email=viewer.user.email,
        full_name=viewer.user.full_name,
        role=viewer.role.value,
        coach_profile_id=viewer.coach_profile.id if viewer.coach_profile else None,
        client_profile_id=viewer.client_profile.id if viewer.client_profile else None,
    )
