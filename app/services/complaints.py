"""Complaint registry: list, create, update status and delete over the data document."""

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.core.errors import NotFound, ValidationError
from app.models import COMPLAINT_STATUSES, Complaint, DataDocument

if TYPE_CHECKING:
    from app.core.storage import DocumentStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


def _next_complaint_id(document: DataDocument) -> int:
    """Current time in ms, bumped past the largest existing id so ids stay unique."""
    candidate = time.time_ns() // 1_000_000
    if document.complaints:
        candidate = max(candidate, max(c.id for c in document.complaints) + 1)
    return candidate


def _required(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


class ComplaintService:
    """CRUD over complaints[]; every mutation goes through the store's single writer."""

    def __init__(self, store: "DocumentStore") -> None:
        self._store = store

    def list(self) -> list[Complaint]:
        """All complaints, most recently created first."""
        return self._store.snapshot().complaints

    def create(self, name: str | None, issue: str | None, email: str | None = None) -> Complaint:
        """Validate, assign id and timestamps, prepend and persist."""
        name = _required(name, "name")
        issue = _required(issue, "issue")

        def apply(document: DataDocument) -> Complaint:
            complaint = Complaint(
                id=_next_complaint_id(document),
                name=name,
                email=(email or "").strip(),
                issue=issue,
                status="Submitted",
                created_at=_now(),
            )
            document.complaints.insert(0, complaint)
            return complaint

        created = self._store.mutate(apply)
        logger.info("Complaint %s created by %r", created.id, created.name)
        return created.model_copy()

    def update_status(self, complaint_id: int, status: str | None = None) -> Complaint:
        """
        Overwrite status when given (must be a known status) and refresh updated_at.
        Raises NotFound for an unknown id, checked before the status value.
        """
        if status is not None and not status.strip():
            status = None

        def apply(document: DataDocument) -> Complaint:
            idx = document.find_complaint_index(complaint_id)
            if idx is None:
                raise NotFound("Complaint not found")
            if status is not None and status not in COMPLAINT_STATUSES:
                raise ValidationError(
                    f"status must be one of: {', '.join(COMPLAINT_STATUSES)}"
                )
            current = document.complaints[idx]
            changes: dict[str, object] = {"updated_at": _now()}
            if status is not None:
                changes["status"] = status
            updated = current.model_copy(update=changes)
            document.complaints[idx] = updated
            return updated

        updated = self._store.mutate(apply)
        logger.info("Complaint %s status=%r", updated.id, updated.status)
        return updated.model_copy()

    def delete(self, complaint_id: int) -> None:
        """Remove the complaint if present. Unknown ids are a no-op."""

        def apply(document: DataDocument) -> bool:
            idx = document.find_complaint_index(complaint_id)
            if idx is None:
                return False
            del document.complaints[idx]
            return True

        if self._store.mutate(apply):
            logger.info("Complaint %s deleted", complaint_id)
