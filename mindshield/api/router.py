"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from mindshield.api.routes import (
    auth, users, mood, patterns, insights,
    voice, games, data, health
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(mood.router)
api_router.include_router(patterns.router)
api_router.include_router(insights.router)
api_router.include_router(voice.router)
api_router.include_router(games.router)
api_router.include_router(data.router)
api_router.include_router(health.router)
