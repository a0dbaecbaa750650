"""Record model for complaints submitted from charging stations."""

from datetime import datetime
from typing import Literal, get_args

from pydantic import BaseModel

ComplaintStatus = Literal["Submitted", "Accepted", "In Progress", "Declined"]
COMPLAINT_STATUSES: tuple[str, ...] = get_args(ComplaintStatus)


class Complaint(BaseModel):
    """
    Persisted complaint. Only status and updated_at change after creation.

    id is derived from the creation time in milliseconds and is unique within the store.
    """

    id: int
    name: str
    email: str = ""
    issue: str
    # Free-form on load so documents written with older statuses still parse.
    status: str = "Submitted"
    created_at: datetime
    updated_at: datetime | None = None
