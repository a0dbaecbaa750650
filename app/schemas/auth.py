"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from app.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class UserView(BaseModel):
    """Authenticated user without password material."""

    id: int
    username: str
    role: str
    name: str | None = None


class LoginResult(BaseModel):
    """Outcome of AuthService.login: a fresh bearer token and the user it identifies."""

    token: str
    user: UserView


class LoginResponse(BaseModel):
    """
    Token returned after successful login.

    Carries both the flat {token, role, username} and nested {ok, token, user} shapes
    so either kind of client can read it.
    Include the token in the Authorization header as: Bearer <token>
    """

    ok: bool = True
    token: str = Field(..., description="JWT bearer token")
    token_type: str = Field(default="bearer", description="Token type")
    role: str
    username: str
    user: UserView


class MeResponse(BaseModel):
    """Response for GET /me."""

    ok: bool = True
    user: UserView
