from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from halal_gains.db.base import Base

CASCADE_ALL_DELETE_ORPHAN = "all, delete-orphan"
DAYS_PER_WEEK = 7


class MealPlan(Base):
    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, index=True)
    coach_id = Column(
        Integer, ForeignKey("coach_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    client_id = Column(
        Integer, ForeignKey("client_profiles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    calories_target = Column(Integer, nullable=True)
    protein_target_g = Column(Integer, nullable=True)
    carbs_target_g = Column(Integer, nullable=True)
    fats_target_g = Column(Integer, nullable=True)
    ramadan_mode = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    client = relationship("ClientProfile")
    days = relationship(
        "MealPlanDay",
        back_populates="meal_plan",
        cascade=CASCADE_ALL_DELETE_ORPHAN,
        order_by="MealPlanDay.day_number",
    )
    week_completions = relationship(
        "MealPlanWeekCompletion",
        back_populates="meal_plan",
        cascade=CASCADE_ALL_DELETE_ORPHAN,
        order_by="MealPlanWeekCompletion.week_number",
    )


class MealPlanDay(Base):
    __tablename__ = "meal_plan_days"
    __table_args__ = (
        UniqueConstraint("meal_plan_id", "day_number", name="uq_meal_plan_days_plan_day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    meal_plan_id = Column(
        Integer, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_number = Column(Integer, nullable=False)
    day_name = Column(String(64), nullable=True)

    meal_plan = relationship("MealPlan", back_populates="days")
    meals = relationship(
        "MealPlanMeal",
        back_populates="day",
        cascade=CASCADE_ALL_DELETE_ORPHAN,
        order_by="MealPlanMeal.id",
    )
    completions = relationship(
        "MealPlanDayCompletion", back_populates="day", cascade=CASCADE_ALL_DELETE_ORPHAN
    )

    @property
    def week_number(self) -> int:
        """Days 1-7 are week 1, days 8-14 week 2, and so on."""
        return (self.day_number - 1) // DAYS_PER_WEEK + 1


class MealPlanMeal(Base):
    __tablename__ = "meal_plan_meals"

    id = Column(Integer, primary_key=True, index=True)
    meal_plan_day_id = Column(
        Integer, ForeignKey("meal_plan_days.id", ondelete="CASCADE"), nullable=False, index=True
    )
    meal_type = Column(String(32), nullable=False)  # breakfast|lunch|dinner|snack|suhoor|iftar
    meal_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    total_calories = Column(Integer, nullable=True)

    day = relationship("MealPlanDay", back_populates="meals")
    foods = relationship(
        "MealPlanFood",
        back_populates="meal",
        cascade=CASCADE_ALL_DELETE_ORPHAN,
        order_by="MealPlanFood.food_order",
    )


class MealPlanFood(Base):
    __tablename__ = "meal_plan_foods"

    id = Column(Integer, primary_key=True, index=True)
    meal_plan_meal_id = Column(
        Integer, ForeignKey("meal_plan_meals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    food_name = Column(String(255), nullable=False)
    serving_size = Column(String(64), nullable=True)
    quantity = Column(Float, nullable=True)
    calories = Column(Integer, nullable=True)
    food_order = Column(Integer, nullable=False, default=0)

    meal = relationship("MealPlanMeal", back_populates="foods")


class MealPlanDayCompletion(Base):
    __tablename__ = "meal_plan_day_completions"
    __table_args__ = (
        UniqueConstraint("meal_plan_day_id", "user_id", name="uq_meal_plan_day_completions"),
    )

    id = Column(Integer, primary_key=True, index=True)
    meal_plan_day_id = Column(
        Integer, ForeignKey("meal_plan_days.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    completed_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    day = relationship("MealPlanDay", back_populates="completions")


class MealPlanWeekCompletion(Base):
    __tablename__ = "meal_plan_week_completions"
    __table_args__ = (
        UniqueConstraint(
            "meal_plan_id", "user_id", "week_number", name="uq_meal_plan_week_completions"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    meal_plan_id = Column(
        Integer, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    week_number = Column(Integer, nullable=False)  # see MealPlanDay.week_number
    weight_kg = Column(Float, nullable=True)
    completed_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    meal_plan = relationship("MealPlan", back_populates="week_completions")
