"""
Video business logic.

Sits between the routers and the repository:
1. Validate input (before anything touches the database)
2. Call the repository
3. Turn "no row" into NotFoundError
4. Map ORM rows to response schemas

Routers stay thin — they only translate HTTP to these calls.
"""

import logging

from video_api.errors import NotFoundError
from video_api.models import Video
from video_api.repositories.videos import VideoRepository, total_pages
from video_api.schemas.videos import (
    PaginatedVideoResponse,
    VideoCreate,
    VideoQuery,
    VideoResponse,
    VideoUpdate,
)
from video_api.services.validation import validate_create, validate_update

logger = logging.getLogger(__name__)


def to_response(video: Video) -> VideoResponse:
    return VideoResponse.model_validate(video)


class VideoService:
    def __init__(self, repository: VideoRepository):
        self.repository = repository

    async def create_video(self, request: VideoCreate) -> VideoResponse:
        """Validate and insert a new video.

        Raises:
            ValidationError: title or youtube_id break the length rules
            StorageError: the insert failed (e.g. duplicate youtube_id)
        """
        validate_create(request)
        video = await self.repository.create(request.title, request.youtube_id)
        logger.info("Created video %s (youtube_id=%s)", video.id, video.youtube_id)
        return to_response(video)

    async def get_video(self, video_id: int) -> VideoResponse:
        video = await self.repository.find_by_id(video_id)
        if video is None:
            raise NotFoundError(video_id)
        return to_response(video)

    async def update_video(self, video_id: int, request: VideoUpdate) -> VideoResponse:
        """Partial update. Only fields present in the request are checked and applied.

        An empty request is still a valid update: nothing changes except
        updated_at.
        """
        changes = validate_update(request)
        video = await self.repository.update(video_id, **changes)
        if video is None:
            raise NotFoundError(video_id)
        logger.info("Updated video %s (fields: %s)", video_id, ", ".join(changes) or "none")
        return to_response(video)

    async def delete_video(self, video_id: int) -> bool:
        """Soft-delete a video.

        Deleting a video that doesn't exist, or was already deleted, is a
        NotFoundError rather than a silent success.
        """
        deleted = await self.repository.delete(video_id)
        if not deleted:
            raise NotFoundError(video_id)
        logger.info("Deleted video %s", video_id)
        return True

    async def list_videos(self, query: VideoQuery) -> PaginatedVideoResponse:
        videos, total = await self.repository.list(query)
        return PaginatedVideoResponse(
            videos=[to_response(v) for v in videos],
            total=total,
            page=query.page,
            per_page=query.per_page,
            total_pages=total_pages(total, query.per_page),
        )
