"""API routes mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from app.api import auth, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
