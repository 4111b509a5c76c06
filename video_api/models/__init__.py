from video_api.database import Base
from video_api.models.video import Video

__all__ = [
    "Base",
    "Video",
]
