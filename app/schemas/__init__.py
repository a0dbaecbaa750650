"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginResult,
    MeResponse,
    UserView,
)
from app.schemas.complaints import (
    ComplaintCreateRequest,
    ComplaintStatusUpdate,
    DeleteResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "ComplaintCreateRequest",
    "ComplaintStatusUpdate",
    "DeleteResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginResult",
    "MeResponse",
    "UserView",
]
