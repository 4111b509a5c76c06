"""
Video persistence (SQLAlchemy, async).

`VideoRepository` is the only code that touches the `videos` table.
These rules hold for every method:

- Soft-deleted rows are invisible. Every query and every UPDATE carries
  the `deleted_at IS NULL` predicate from `_not_deleted()`.
- Writes are single conditional UPDATEs, never read-then-write, so
  concurrent requests can't revive or re-delete a tombstoned row.
- SQLAlchemy errors never leak out. They're rolled back and re-raised as
  `StorageError`, with the original exception chained.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Select, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from video_api.errors import StorageError
from video_api.models import Video
from video_api.models.video import MAX_INTEGER
from video_api.schemas.videos import VideoQuery

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MIN_INTEGER = -MAX_INTEGER - 1

# Columns a client may sort by; anything else falls back to created_at.
SORTABLE_COLUMNS = {
    "title": Video.title,
    "youtube_id": Video.youtube_id,
    "created_at": Video.created_at,
}
DEFAULT_ORDER_BY = "created_at"
DEFAULT_ORDER_DIRECTION = "desc"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def total_pages(total: int, per_page: int) -> int:
    """ceil(total / per_page); 0 when there is nothing to show."""
    if per_page <= 0:
        return 0
    return math.ceil(total / per_page)


def _not_deleted():
    return Video.deleted_at.is_(None)


def _active() -> Select:
    """SELECT over videos that haven't been soft-deleted."""
    return select(Video).where(_not_deleted())


def _fits_integer_column(value: int) -> bool:
    return MIN_INTEGER <= value <= MAX_INTEGER


def _active_row(video_id: int) -> tuple:
    """WHERE clauses for one specific, not-yet-deleted video."""
    return (Video.id == video_id, _not_deleted())


def _search_clause(search: str):
    # autoescape so "%" and "_" in the search term match literally
    return Video.title.contains(search, autoescape=True) | Video.youtube_id.contains(
        search, autoescape=True
    )


def _order_clauses(order_by: Optional[str], order_direction: Optional[str]) -> list:
    column = SORTABLE_COLUMNS.get(order_by or "", SORTABLE_COLUMNS[DEFAULT_ORDER_BY])
    direction = (order_direction or "").lower()
    if direction not in ("asc", "desc"):
        direction = DEFAULT_ORDER_DIRECTION

    # id as tie-breaker keeps pages stable when sort values repeat
    if direction == "asc":
        return [column.asc(), Video.id.asc()]
    return [column.desc(), Video.id.desc()]


class VideoRepository:
    """CRUD + filtered listing for videos, bound to one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, title: str, youtube_id: str) -> Video:
        now = utcnow()
        video = Video(
            title=title,
            youtube_id=youtube_id,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        try:
            self.db.add(video)
            await self.db.commit()
            await self.db.refresh(video)
        except SQLAlchemyError as exc:
            await self._rollback()
            raise StorageError(f"Failed to create video: {exc}") from exc
        return video

    async def find_by_id(self, video_id: int) -> Optional[Video]:
        if not _fits_integer_column(video_id):
            return None
        try:
            result = await self.db.execute(_active().where(Video.id == video_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            await self._rollback()
            raise StorageError(f"Failed to load video {video_id}: {exc}") from exc

    async def update(
        self,
        video_id: int,
        title: Optional[str] = None,
        youtube_id: Optional[str] = None,
    ) -> Optional[Video]:
        """Apply the given fields (None = leave as is) and bump updated_at.

        The write is a single conditional UPDATE on an active row, so a
        video deleted concurrently is never modified.
        """
        if not _fits_integer_column(video_id):
            return None

        values = {"updated_at": utcnow()}
        if title is not None:
            values["title"] = title
        if youtube_id is not None:
            values["youtube_id"] = youtube_id

        try:
            result = await self.db.execute(
                update(Video)
                .where(*_active_row(video_id))
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                await self.db.rollback()
                return None
            await self.db.commit()
            reloaded = await self.db.execute(
                select(Video)
                .where(Video.id == video_id)
                .execution_options(populate_existing=True)
            )
            return reloaded.scalar_one()
        except SQLAlchemyError as exc:
            await self._rollback()
            raise StorageError(f"Failed to update video {video_id}: {exc}") from exc

    async def delete(self, video_id: int) -> bool:
        """Soft-delete. False when there was no active row to delete.

        Only one of several concurrent deletes of the same video can match
        the `deleted_at IS NULL` condition, so the tombstone is set once.
        """
        if not _fits_integer_column(video_id):
            return False
        try:
            result = await self.db.execute(
                update(Video)
                .where(*_active_row(video_id))
                .values(deleted_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._rollback()
            raise StorageError(f"Failed to delete video {video_id}: {exc}") from exc
        return result.rowcount == 1

    async def list(self, query: VideoQuery) -> tuple[list[Video], int]:
        """Return (page of rows, total matching rows across all pages)."""
        offset = (query.page - 1) * query.per_page

        stmt = _active()
        if query.search:
            stmt = stmt.where(_search_clause(query.search))

        count_stmt = select(func.count()).select_from(stmt.subquery())
        page_stmt = (
            stmt.order_by(*_order_clauses(query.order_by, query.order_direction))
            .limit(query.per_page)
            .offset(offset)
        )

        try:
            total = (await self.db.execute(count_stmt)).scalar_one()
            if offset > MAX_INTEGER:
                # Past anything the database could hold
                return [], total
            videos = list((await self.db.execute(page_stmt)).scalars().all())
        except SQLAlchemyError as exc:
            await self._rollback()
            raise StorageError(f"Failed to list videos: {exc}") from exc
        return videos, total

    async def _rollback(self) -> None:
        try:
            await self.db.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback failed after storage error", exc_info=True)
