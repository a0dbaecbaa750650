"""Login and current-user endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_auth_service, get_current_user, raise_http
from app.core.errors import ServiceError
from app.schemas.auth import LoginRequest, LoginResponse, MeResponse, UserView
from app.services.auth import AuthService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a bearer token and the user's role.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        result = auth.login(body.username, body.password)
    except ServiceError as e:
        raise_http(e)
    return LoginResponse(
        token=result.token,
        role=result.user.role,
        username=result.user.username,
        user=result.user,
    )


@router.get("/me", response_model=MeResponse)
def me(user: Annotated[UserView, Depends(get_current_user)]) -> MeResponse:
    """Return the user identified by the bearer token."""
    return MeResponse(user=user)
