"""API routes."""

from fastapi import APIRouter

from app.api.routes import auth, complaints, health

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(complaints.router, prefix="/complaints", tags=["complaints"])
router.include_router(health.router, prefix="/health", tags=["health"])
