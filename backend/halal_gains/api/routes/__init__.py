from fastapi import APIRouter

from halal_gains.api.routes import (
    auth,
    chat,
    coaches,
    hydration,
    meal_plans,
    profiles,
    workout_plans,
)


api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(coaches.router, prefix="/coaches", tags=["coaches"])
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])
api_router.include_router(meal_plans.router, prefix="/meal-plans", tags=["meal-plans"])
api_router.include_router(
    hydration.router, prefix="/hydration-reminders", tags=["hydration-reminders"]
)
api_router.include_router(
    workout_plans.router, prefix="/workout-plans", tags=["workout-plans"]
)
