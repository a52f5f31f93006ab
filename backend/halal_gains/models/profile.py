from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from halal_gains.db.base import Base
from halal_gains.models.user import User


class Gender(str, PyEnum):
    MALE = "male"
    FEMALE = "female"


class FitnessLevel(str, PyEnum):
    UNFIT = "unfit"
    HEALTHY = "healthy"
    ATHLETE = "athlete"


class FitnessGoal(str, PyEnum):
    LOSE_WEIGHT = "lose_weight"
    BUILD_MUSCLE = "build_muscle"


class CoachProfile(Base):
    __tablename__ = "coach_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    specialties: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    years_of_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    profile_photos: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    user: Mapped[User] = relationship("User", back_populates="coach_profile")
    clients = relationship("ClientProfile", back_populates="coach")

    @property
    def photo(self) -> str | None:
        return self.profile_photos[0] if self.profile_photos else None


class ClientProfile(Base):
    __tablename__ = "client_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    gender: Mapped[Gender | None] = mapped_column(SQLEnum(Gender), nullable=True)
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    fitness_level: Mapped[FitnessLevel] = mapped_column(
        SQLEnum(FitnessLevel), nullable=False, default=FitnessLevel.HEALTHY
    )
    fitness_goal: Mapped[FitnessGoal] = mapped_column(
        SQLEnum(FitnessGoal), nullable=False, default=FitnessGoal.LOSE_WEIGHT
    )
    post_pregnancy_recovery: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    profile_photo: Mapped[str | None] = mapped_column(String(512), nullable=True)
    coach_id: Mapped[int | None] = mapped_column(
        ForeignKey("coach_profiles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    user: Mapped[User] = relationship("User", back_populates="client_profile")
    coach: Mapped[CoachProfile | None] = relationship(
        "CoachProfile", back_populates="clients"
    )
