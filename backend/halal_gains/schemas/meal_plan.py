from datetime import datetime

from pydantic import BaseModel, Field


class MealPlanBase(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    calories_target: int | None = Field(default=None, ge=0)
    protein_target_g: int | None = Field(default=None, ge=0)
    carbs_target_g: int | None = Field(default=None, ge=0)
    fats_target_g: int | None = Field(default=None, ge=0)
    ramadan_mode: bool = False
    client_id: int | None = None


class MealPlanCreate(MealPlanBase):
    pass


class MealPlanUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    calories_target: int | None = Field(default=None, ge=0)
    protein_target_g: int | None = Field(default=None, ge=0)
    carbs_target_g: int | None = Field(default=None, ge=0)
    fats_target_g: int | None = Field(default=None, ge=0)
    ramadan_mode: bool | None = None
    client_id: int | None = None


class MealPlanPublic(MealPlanBase):
    id: int
    coach_id: int
    created_at: datetime
    updated_at: datetime
    client_name: str | None = None
    client_photo: str | None = None


class FoodIn(BaseModel):
    food_name: str = Field(min_length=1)
    serving_size: str | None = None
    quantity: float | None = Field(default=None, ge=0)
    calories: int | None = Field(default=None, ge=0)


class MealIn(BaseModel):
    meal_type: str = Field(min_length=1)
    meal_name: str | None = None
    description: str | None = None
    total_calories: int | None = Field(default=None, ge=0)
    foods: list[FoodIn] = Field(default_factory=list)


class MealPlanDayCreate(BaseModel):
    day_number: int = Field(ge=1)
    day_name: str | None = None
    meals: list[MealIn] = Field(default_factory=list)


class FoodPublic(FoodIn):
    id: int
    food_order: int

    class Config:
        from_attributes = True


class MealPublic(BaseModel):
    id: int
    meal_type: str
    meal_name: str | None = None
    description: str | None = None
    total_calories: int | None = None
    foods: list[FoodPublic] = []

    class Config:
        from_attributes = True


class MealPlanDayPublic(BaseModel):
    id: int
    day_number: int
    day_name: str | None = None
    meals: list[MealPublic] = []
    week_number: int
    completed: bool = False

    class Config:
        from_attributes = True


class MealPlanDayCompletionUpdate(BaseModel):
    completed: bool = True


class MealPlanDayCompletionPublic(BaseModel):
    meal_plan_day_id: int
    completed: bool
    completed_at: datetime | None = None


class MealPlanWeekCompletionCreate(BaseModel):
    weight_kg: float = Field(gt=0, le=500)


class MealPlanWeekCompletionPublic(BaseModel):
    meal_plan_id: int
    user_id: int
    week_number: int
    weight_kg: float | None = None
    completed_at: datetime

    class Config:
        from_attributes = True


class MealPlanDetail(MealPlanPublic):
    days: list[MealPlanDayPublic] = []
    week_completions: list[MealPlanWeekCompletionPublic] = []
