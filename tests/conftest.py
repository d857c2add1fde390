"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from summarist.api.dependencies import get_summarizer
from summarist.domain.summary import DEFAULT_STYLE, SummaryStyle
from summarist.infrastructure.database import get_session
from summarist.infrastructure.models import Base
from summarist.main import app
from summarist.services.rate_limiter import FixedWindowRateLimiter

# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeSummarizer:
    """Stand-in for SummarizerService that never calls OpenAI."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, SummaryStyle]] = []
        self.error: Exception | None = None

    async def generate(self, text: str, style: SummaryStyle = DEFAULT_STYLE) -> str:
        self.calls.append((text, style))
        if self.error is not None:
            raise self.error
        return f"[{style}] {text[:40]}"


@pytest.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_summarizer() -> FakeSummarizer:
    return FakeSummarizer()


@pytest.fixture
async def client(session_factory, fake_summarizer) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client backed by the in-memory database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
            finally:
                if session.in_transaction():
                    await session.rollback()

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_summarizer] = lambda: fake_summarizer
    original_limiter = app.state.rate_limiter
    app.state.rate_limiter = FixedWindowRateLimiter(max_requests=10, window_seconds=15 * 60)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.state.rate_limiter = original_limiter
    app.dependency_overrides.clear()
