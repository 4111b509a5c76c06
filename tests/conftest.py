"""
Test fixtures shared across all tests.

Architecture:
- Tests run against a throwaway SQLite file. DATABASE_URL is set BEFORE
  the app is imported, because the app creates its engine at import time.
- pyproject.toml sets the asyncio loop scope to "session" so all tests
  share ONE event loop; pooled aiosqlite connections stay bound to it.
- Every test starts with an empty `videos` table (see `clean_videos`).
- The HTTP test client uses the real FastAPI app with its own sessions.
- Service/repository tests get their own session via `db_session`.
"""

import os
import tempfile

_TEST_DB_DIR = tempfile.mkdtemp(prefix="video-api-tests-")
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(_TEST_DB_DIR, "test_videos.db")
)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import delete  # noqa: E402

from video_api.database import AsyncSessionLocal, Base, engine  # noqa: E402
from video_api.main import app  # noqa: E402
from video_api.models import Video  # noqa: E402
from video_api.repositories.videos import VideoRepository  # noqa: E402
from video_api.services.videos import VideoService  # noqa: E402


def youtube_id(n: int) -> str:
    """A unique, valid (11-char) YouTube id for the n-th test video."""
    return f"vid{n:08d}"


@pytest_asyncio.fixture(scope="session")
async def setup_db():
    """Create all tables once before the test session."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture(autouse=True)
async def clean_videos(setup_db):
    """Physically wipe the table so counts and totals are exact per test."""
    async with AsyncSessionLocal() as session:
        await session.execute(delete(Video))
        await session.commit()
    yield


@pytest_asyncio.fixture
async def client():
    """Async HTTP test client against the real FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def repository(db_session) -> VideoRepository:
    return VideoRepository(db_session)


@pytest.fixture
def service(repository) -> VideoService:
    return VideoService(repository)


# --- Seed data fixtures ---

@pytest_asyncio.fixture
async def test_video():
    """One active video, committed through its own session."""
    async with AsyncSessionLocal() as session:
        video = await VideoRepository(session).create(
            "Never Gonna Give You Up", "dQw4w9WgXcQ"
        )
    return video


@pytest_asyncio.fixture
async def three_videos():
    """Three active videos created in order: alpha, bravo, charlie."""
    videos = []
    async with AsyncSessionLocal() as session:
        repo = VideoRepository(session)
        for n, title in enumerate(["alpha", "bravo", "charlie"], start=1):
            videos.append(await repo.create(title, youtube_id(n)))
    return videos
