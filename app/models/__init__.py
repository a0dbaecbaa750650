"""Typed records persisted in the JSON data document."""

from app.models.complaint import COMPLAINT_STATUSES, Complaint, ComplaintStatus
from app.models.document import DataDocument
from app.models.user import ROLES, Role, User

__all__ = [
    "COMPLAINT_STATUSES",
    "Complaint",
    "ComplaintStatus",
    "DataDocument",
    "ROLES",
    "Role",
    "User",
]
