"""
Pydantic schemas for the Video API.

Schemas define the shape of data flowing through the API:
- Request schemas: what the client sends us
- Response schemas: what we send back

These are SEPARATE from SQLAlchemy models on purpose.
Models = database shape. Schemas = API shape.

Request schemas only check types. Length rules live in
`video_api.services.validation` so they run in the service layer and
produce our own 400 error body instead of FastAPI's 422.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from video_api.models.video import MAX_INTEGER


# --- Request Schemas ---

class VideoCreate(BaseModel):
    """Body of POST /videos."""
    title: str
    youtube_id: str


class VideoUpdate(BaseModel):
    """Body of PUT /videos/{id}. Every field is optional.

    Omitted fields are left unchanged. Use `provided_fields()` rather than
    checking for None, so "not sent" and "sent as null" stay distinguishable.
    """
    title: Optional[str] = None
    youtube_id: Optional[str] = None

    def provided_fields(self) -> dict:
        """Fields the client actually sent, in declaration order."""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name in self.model_fields_set
        }


class VideoQuery(BaseModel):
    """Query parameters for GET /videos."""
    page: int = Field(1, ge=1, le=MAX_INTEGER)
    per_page: int = Field(10, ge=1, le=MAX_INTEGER)
    search: Optional[str] = None
    order_by: str = "created_at"
    order_direction: str = "desc"


# --- Response Schemas ---

class VideoResponse(BaseModel):
    """What we return when a client asks about a video."""
    id: int
    title: str
    youtube_id: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
    # from_attributes=True lets Pydantic read from SQLAlchemy model attributes


class PaginatedVideoResponse(BaseModel):
    """Paginated list of videos."""
    videos: list[VideoResponse]
    total: int
    page: int
    per_page: int
    total_pages: int


class VideoDeletedResponse(BaseModel):
    """Returned after a successful (soft) delete."""
    message: str
    video_id: int
