"""Health check endpoint with a data file writability check."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings
from app.core.storage import JsonFileStore, get_store
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    store: Annotated[JsonFileStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """
    Return service health status and whether the data file can be written.
    Used by load balancers and monitoring.
    """
    return HealthResponse(
        environment=settings.APP_ENV,
        storage="available" if store.is_available() else "unavailable",
    )
