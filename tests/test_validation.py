"""
Unit tests for the field rules in video_api.services.validation.
"""

import pytest

from video_api.errors import ValidationError
from video_api.schemas.videos import VideoCreate, VideoUpdate
from video_api.services.validation import (
    check_title,
    check_youtube_id,
    validate_create,
    validate_update,
)


@pytest.mark.parametrize("title", ["a", "x" * 100, "A normal title"])
def test_check_title_accepts(title):
    assert check_title(title) is None


@pytest.mark.parametrize("title", ["", "x" * 101, None])
def test_check_title_rejects(title):
    assert check_title(title).field == "title"


def test_check_youtube_id():
    assert check_youtube_id("dQw4w9WgXcQ") is None
    assert check_youtube_id("dQw4w9WgXc") is not None
    assert check_youtube_id("dQw4w9WgXcQQ") is not None
    assert check_youtube_id(None) is not None


def test_validate_create_lists_every_bad_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_create(VideoCreate(title="", youtube_id="nope"))

    error = exc_info.value
    assert [e.field for e in error.errors] == ["title", "youtube_id"]
    assert "title" in error.message and "youtube_id" in error.message


def test_validate_update_returns_only_sent_fields():
    assert validate_update(VideoUpdate()) == {}
    assert validate_update(VideoUpdate(title="New")) == {"title": "New"}
    assert validate_update(VideoUpdate.model_validate({"youtube_id": "dQw4w9WgXcQ"})) == {
        "youtube_id": "dQw4w9WgXcQ"
    }


def test_validate_update_rejects_null_and_bad_lengths():
    with pytest.raises(ValidationError) as exc_info:
        validate_update(VideoUpdate.model_validate({"title": None, "youtube_id": "short"}))

    assert [e.field for e in exc_info.value.errors] == ["title", "youtube_id"]
