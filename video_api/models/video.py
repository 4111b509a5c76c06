"""
SQLAlchemy model for the `videos` table.

A video is never physically deleted by the API. Deleting sets `deleted_at`
(a "tombstone"), and every read path filters those rows out — see
`VideoRepository._active()`.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from video_api.database import Base

TITLE_MAX_LENGTH = 100
YOUTUBE_ID_LENGTH = 11
# Largest value a 64-bit INTEGER column (and LIMIT/OFFSET) can hold
MAX_INTEGER = 2**63 - 1


class Video(Base):
    __tablename__ = "videos"
    __table_args__ = (
        Index("idx_videos_youtube_id", "youtube_id", unique=True),
        Index("idx_videos_title", "title"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    youtube_id: Mapped[str] = mapped_column(String(YOUTUBE_ID_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    def __repr__(self) -> str:
        return f"<Video id={self.id} youtube_id={self.youtube_id!r}>"
