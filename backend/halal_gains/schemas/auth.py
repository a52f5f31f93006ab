from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    sub: str
    exp: datetime
    type: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    full_name: str | None = None


class RefreshRequest(BaseModel):
    refresh_token: str


class SessionInfo(BaseModel):
    """Who is signed in and which role they act in."""
    user_id: int
    email: EmailStr
    full_name: str | None = None
    role: Literal["coach", "client"]
    coach_profile_id: int | None = None
    client_profile_id: int | None = None
