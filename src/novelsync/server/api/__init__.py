"""API routes and endpoints."""

from fastapi import APIRouter

from novelsync.server.api.health import router as health_router
from novelsync.server.api.sync import router as sync_router

# Main API router
api_router = APIRouter()

# Include sub-routers
api_router.include_router(health_router, tags=["health"])
api_router.include_router(sync_router, tags=["sync"])

__all__ = ["api_router"]
