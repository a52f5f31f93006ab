from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection

from halal_gains.core.security import user_id_from_token
from halal_gains.db.session import get_db
from halal_gains.models.user import User
from halal_gains.realtime.feed import LiveFeed
from halal_gains.services.accounts import Viewer, resolve_viewer

bearer = HTTPBearer(auto_error=False)


def user_from_token(db: Session, token: str | None) -> User | None:
    """Resolve an access token to its account, or None when it is missing or unusable."""
    if not token:
        return None
    try:
        user_id = user_id_from_token(token)
    except ValueError:
        return None
    return db.get(User, user_id)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user_id = user_id_from_token(credentials.credentials)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_viewer(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Viewer:
    return resolve_viewer(db, current_user)


def get_coach_viewer(viewer: Viewer = Depends(get_viewer)) -> Viewer:
    if not viewer.is_coach:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Coach account required"
        )
    return viewer


def get_live_feed(connection: HTTPConnection) -> LiveFeed:
    return connection.app.state.live_feed
