"""Shared route dependencies: services, bearer auth, role checks and error mapping."""

from collections.abc import Callable
from typing import Annotated, NoReturn

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import Settings, get_settings
from app.core.errors import AuthError, ServiceError, StorageError
from app.core.storage import JsonFileStore, get_store
from app.models import ROLES
from app.schemas.auth import UserView
from app.services.auth import AuthService
from app.services.complaints import ComplaintService

security = HTTPBearer(auto_error=False)


def raise_http(e: ServiceError) -> NoReturn:
    """Translate a service error into the HTTP response for it."""
    if isinstance(e, AuthError):
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    if isinstance(e, StorageError):
        raise HTTPException(
            status_code=e.status_code,
            detail="Internal server error",
        ) from e
    raise HTTPException(status_code=e.status_code, detail=e.message) from e


def get_auth_service(
    store: Annotated[JsonFileStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    return AuthService(store, settings)


def get_complaint_service(
    store: Annotated[JsonFileStore, Depends(get_store)],
) -> ComplaintService:
    return ComplaintService(store)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> UserView:
    """Dependency: require a valid Bearer token and return the current user. Raises 401 otherwise."""
    token = credentials.credentials if credentials is not None else None
    try:
        return auth.authenticate(token)
    except AuthError as e:
        raise_http(e)


def require_role(role: str) -> Callable[..., UserView | None]:
    """
    Dependency factory for complaint mutations.

    Returns None without checking anything unless COMPLAINTS_REQUIRE_AUTH is set;
    then 401 without a valid token and 403 for any other role.
    """
    if role not in ROLES:
        raise ValueError(f"Unknown role {role!r}; expected one of: {', '.join(ROLES)}")

    def dependency(
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
        auth: Annotated[AuthService, Depends(get_auth_service)],
        settings: Annotated[Settings, Depends(get_settings)],
    ) -> UserView | None:
        if not settings.COMPLAINTS_REQUIRE_AUTH:
            return None
        user = get_current_user(credentials, auth)
        if user.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"{role.capitalize()} access required",
            )
        return user

    return dependency
