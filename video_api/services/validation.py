"""
Field-level checks for video payloads.

The rules:
- title: 1 to 100 characters
- youtube_id: exactly 11 characters

On create both fields are required. On update each field is optional, but
whatever is sent must pass the same rules (and can't be null, since both
columns are NOT NULL).
"""

from typing import Optional

from video_api.errors import FieldError, ValidationError
from video_api.models.video import TITLE_MAX_LENGTH, YOUTUBE_ID_LENGTH
from video_api.schemas.videos import VideoCreate, VideoUpdate


def check_title(title: Optional[str]) -> Optional[FieldError]:
    if title is None:
        return FieldError("title", "is required")
    if not 1 <= len(title) <= TITLE_MAX_LENGTH:
        return FieldError(
            "title", f"length must be between 1 and {TITLE_MAX_LENGTH} characters"
        )
    return None


def check_youtube_id(youtube_id: Optional[str]) -> Optional[FieldError]:
    if youtube_id is None:
        return FieldError("youtube_id", "is required")
    if len(youtube_id) != YOUTUBE_ID_LENGTH:
        return FieldError(
            "youtube_id", f"length must be exactly {YOUTUBE_ID_LENGTH} characters"
        )
    return None


_CHECKS = {
    "title": check_title,
    "youtube_id": check_youtube_id,
}


def _raise_if_any(errors: list[Optional[FieldError]]) -> None:
    found = [e for e in errors if e is not None]
    if found:
        raise ValidationError(found)


def validate_create(request: VideoCreate) -> None:
    """Raise ValidationError listing every bad field, or return None."""
    _raise_if_any([
        check_title(request.title),
        check_youtube_id(request.youtube_id),
    ])


def validate_update(request: VideoUpdate) -> dict:
    """Check only the fields the client sent.

    Returns those fields as a dict, ready to hand to the repository.
    """
    changes = request.provided_fields()
    errors = []
    for field, value in changes.items():
        if value is None:
            errors.append(FieldError(field, "cannot be null"))
        else:
            errors.append(_CHECKS[field](value))
    _raise_if_any(errors)
    return changes
