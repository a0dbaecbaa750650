"""The whole persisted state: one JSON document with users and complaints."""

from pydantic import BaseModel, Field

from app.models.complaint import Complaint
from app.models.user import User


class DataDocument(BaseModel):
    """Top-level shape of DATA_FILE. complaints is kept newest first."""

    users: list[User] = Field(default_factory=list)
    complaints: list[Complaint] = Field(default_factory=list)

    def find_user(self, user_id: int) -> User | None:
        return next((u for u in self.users if u.id == user_id), None)

    def find_user_by_username(self, username: str) -> User | None:
        return next((u for u in self.users if u.username == username), None)

    def find_complaint_index(self, complaint_id: int) -> int | None:
        for i, c in enumerate(self.complaints):
            if c.id == complaint_id:
                return i
        return None
