"""Record model for dashboard users (auth and role-based views)."""

from typing import Literal, get_args

from pydantic import BaseModel, Field

Role = Literal["company", "station"]
ROLES: tuple[str, ...] = get_args(Role)


class User(BaseModel):
    """
    User account as stored in the data document.

    role: 'company' (network operator) or 'station' (charging station user).
    Users are created only by seeding; the API never updates or deletes them.
    """

    id: int
    username: str = Field(..., min_length=1, max_length=255)
    password_hash: str
    role: Role
    name: str | None = None
