"""
Video CRUD API endpoints.

    POST   /videos        create
    GET    /videos        list (page, per_page, search, order_by, order_direction)
    GET    /videos/{id}   get one
    PUT    /videos/{id}   partial update
    DELETE /videos/{id}   soft delete

main.py mounts this router twice: under /api/v1 and at the root.

Design notes:
- Routers are THIN — they parse HTTP requests and call VideoService
- Errors are raised by the service and rendered by the handlers in
  video_api.errors, so there's no try/except here
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from video_api.database import get_db
from video_api.models.video import MAX_INTEGER
from video_api.repositories.videos import (
    DEFAULT_ORDER_BY,
    DEFAULT_ORDER_DIRECTION,
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    VideoRepository,
)
from video_api.schemas.videos import (
    PaginatedVideoResponse,
    VideoCreate,
    VideoDeletedResponse,
    VideoQuery,
    VideoResponse,
    VideoUpdate,
)
from video_api.services.videos import VideoService

router = APIRouter(prefix="/videos", tags=["videos"])


def get_video_service(db: AsyncSession = Depends(get_db)) -> VideoService:
    """One service (and repository) per request, sharing the request's session."""
    return VideoService(VideoRepository(db))


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video(
    request: VideoCreate,
    service: VideoService = Depends(get_video_service),
):
    """Create a video. title: 1-100 chars, youtube_id: exactly 11 chars."""
    return await service.create_video(request)


@router.get("", response_model=PaginatedVideoResponse)
async def list_videos(
    page: int = Query(DEFAULT_PAGE, ge=1, le=MAX_INTEGER),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_INTEGER),
    search: Optional[str] = None,
    order_by: str = DEFAULT_ORDER_BY,
    order_direction: str = DEFAULT_ORDER_DIRECTION,
    service: VideoService = Depends(get_video_service),
):
    """List active videos with optional search, sorting and pagination.

    Args:
        page: Page number (1-indexed)
        per_page: Results per page
        search: Substring to look for in title or youtube_id
        order_by: title, youtube_id or created_at (anything else → created_at)
        order_direction: asc or desc (anything else → desc)
    """
    query = VideoQuery(
        page=page,
        per_page=per_page,
        search=search,
        order_by=order_by,
        order_direction=order_direction,
    )
    return await service.list_videos(query)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(
    video_id: int,
    service: VideoService = Depends(get_video_service),
):
    return await service.get_video(video_id)


@router.put("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: int,
    request: VideoUpdate,
    service: VideoService = Depends(get_video_service),
):
    """Update any subset of title / youtube_id. Omitted fields are kept."""
    return await service.update_video(video_id, request)


@router.delete("/{video_id}", response_model=VideoDeletedResponse)
async def delete_video(
    video_id: int,
    service: VideoService = Depends(get_video_service),
):
    """Soft-delete a video. Deleting twice returns 404 the second time."""
    await service.delete_video(video_id)
    return VideoDeletedResponse(message="Video deleted", video_id=video_id)
