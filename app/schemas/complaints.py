"""Request/response schemas for the complaints endpoints."""

from pydantic import BaseModel, Field

# Presence and blankness of name/issue are checked by ComplaintService so every
# missing-field case reports the same 400.


class ComplaintCreateRequest(BaseModel):
    """Body for POST /complaints."""

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    issue: str | None = Field(default=None, max_length=5000)


class ComplaintStatusUpdate(BaseModel):
    """Body for PATCH /complaints/{id}. Omitting status only refreshes updated_at."""

    status: str | None = Field(
        default=None,
        description="One of: Submitted, Accepted, In Progress, Declined",
    )


class DeleteResponse(BaseModel):
    success: bool = True
