"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from weeklydiary.api.routes import (
    auth, csrf, users, diary, schedules, calendar, upload, friends
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(csrf.router)
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(diary.router)
api_router.include_router(schedules.router)
api_router.include_router(calendar.router)
api_router.include_router(upload.router)
api_router.include_router(friends.router)
