"""
Combines and registers all versioned API endpoint routers.

This keeps routing modular and clean.
"""

# app/api/v1/router.py
from fastapi import APIRouter
from .endpoints import users, skills, swaps, feedback, notifications, health

api_router = APIRouter()
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(skills.router, prefix="/skills", tags=["Skills"])
api_router.include_router(swaps.router, prefix="/swaps", tags=["Swaps"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
