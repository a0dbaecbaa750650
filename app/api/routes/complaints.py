"""Complaints CRUD: stations submit, the company reviews, updates status and deletes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.deps import get_complaint_service, raise_http, require_role
from app.core.errors import ServiceError
from app.models import Complaint
from app.schemas.auth import UserView
from app.schemas.complaints import (
    ComplaintCreateRequest,
    ComplaintStatusUpdate,
    DeleteResponse,
)
from app.services.complaints import ComplaintService

router = APIRouter()


@router.get("", response_model=list[Complaint])
def list_complaints(
    complaints: Annotated[ComplaintService, Depends(get_complaint_service)],
) -> list[Complaint]:
    """All complaints, most recently created first. No pagination or filtering."""
    return complaints.list()


@router.post("", response_model=Complaint, status_code=status.HTTP_201_CREATED)
def create_complaint(
    body: ComplaintCreateRequest,
    complaints: Annotated[ComplaintService, Depends(get_complaint_service)],
    _user: Annotated[UserView | None, Depends(require_role("station"))],
) -> Complaint:
    """Submit a complaint. name and issue are required; status starts as Submitted."""
    try:
        return complaints.create(body.name, body.issue, email=body.email)
    except ServiceError as e:
        raise_http(e)


@router.patch("/{complaint_id}", response_model=Complaint)
def update_complaint(
    complaint_id: int,
    complaints: Annotated[ComplaintService, Depends(get_complaint_service)],
    _user: Annotated[UserView | None, Depends(require_role("company"))],
    body: ComplaintStatusUpdate | None = None,
) -> Complaint:
    """
    Set a complaint's status (Submitted, Accepted, In Progress, Declined).
    updated_at is refreshed even when no status is sent. 404 for an unknown id.
    """
    new_status = body.status if body is not None else None
    try:
        return complaints.update_status(complaint_id, new_status)
    except ServiceError as e:
        raise_http(e)


@router.delete("/{complaint_id}", response_model=DeleteResponse)
def delete_complaint(
    complaint_id: int,
    complaints: Annotated[ComplaintService, Depends(get_complaint_service)],
    _user: Annotated[UserView | None, Depends(require_role("company"))],
) -> DeleteResponse:
    """Delete a complaint. Deleting an id that does not exist also succeeds."""
    try:
        complaints.delete(complaint_id)
    except ServiceError as e:
        raise_http(e)
    return DeleteResponse(success=True)
