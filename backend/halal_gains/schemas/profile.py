from datetime import datetime

from pydantic import BaseModel, Field

from halal_gains.models.profile import FitnessGoal, FitnessLevel, Gender


class CoachProfileBase(BaseModel):
    full_name: str
    bio: str | None = None
    specialties: list[str] = Field(default_factory=list)
    years_of_experience: int | None = Field(default=None, ge=0)
    profile_photos: list[str] = Field(default_factory=list)


class CoachProfileUpdate(BaseModel):
    full_name: str | None = None
    bio: str | None = None
    specialties: list[str] | None = None
    years_of_experience: int | None = Field(default=None, ge=0)
    profile_photos: list[str] | None = None


class CoachProfilePublic(CoachProfileBase):
    id: int
    user_id: int
    rating: float | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class ClientProfileBase(BaseModel):
    full_name: str
    age: int | None = Field(default=None, ge=13, le=120)
    location: str | None = None
    gender: Gender | None = None
    weight_kg: float | None = Field(default=None, gt=0)
    fitness_level: FitnessLevel = FitnessLevel.HEALTHY
    fitness_goal: FitnessGoal = FitnessGoal.LOSE_WEIGHT
    post_pregnancy_recovery: bool = False
    profile_photo: str | None = None


class ClientProfileUpdate(BaseModel):
    full_name: str | None = None
    age: int | None = Field(default=None, ge=13, le=120)
    location: str | None = None
    gender: Gender | None = None
    weight_kg: float | None = Field(default=None, gt=0)
    fitness_level: FitnessLevel | None = None
    fitness_goal: FitnessGoal | None = None
    post_pregnancy_recovery: bool | None = None
    profile_photo: str | None = None


class ClientProfilePublic(ClientProfileBase):
    id: int
    user_id: int
    coach_id: int | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
