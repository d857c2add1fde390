"""FastAPI dependency injection providers."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from summarist.config import get_settings
from summarist.domain.errors import RateLimitError
from summarist.infrastructure.database import get_session
from summarist.repositories.summary_repo import SummaryRepository
from summarist.services.rate_limiter import FixedWindowRateLimiter, client_key
from summarist.services.summarizer import SummarizerService

logger = logging.getLogger(__name__)

# Type alias for database session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]


def build_rate_limiter() -> FixedWindowRateLimiter:
    """Build the process-wide limiter from settings."""
    settings = get_settings()
    return FixedWindowRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


async def get_summary_repository(
    session: SessionDep,
) -> AsyncGenerator[SummaryRepository, None]:
    """Provide SummaryRepository instance."""
    yield SummaryRepository(session)


def get_summarizer(request: Request) -> SummarizerService:
    """Provide the application's SummarizerService, creating it on first use."""
    summarizer = getattr(request.app.state, "summarizer", None)
    if summarizer is None:
        summarizer = SummarizerService()
        request.app.state.summarizer = summarizer
    return summarizer


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    """Provide the limiter built at application start."""
    return request.app.state.rate_limiter


RateLimiterDep = Annotated[FixedWindowRateLimiter, Depends(get_rate_limiter)]


async def enforce_rate_limit(request: Request, limiter: RateLimiterDep) -> str:
    """Admit the caller or raise RateLimitError. Returns the client key."""
    key = client_key(request.headers)
    if not limiter.admit(key):
        logger.warning(f"Rate limit exceeded for client {key}")
        raise RateLimitError(
            "Rate limit exceeded. Please try again later.",
            retry_after=limiter.retry_after(key),
        )
    return key


# Type aliases for commonly used dependencies
SummaryRepoDep = Annotated[SummaryRepository, Depends(get_summary_repository)]
SummarizerDep = Annotated[SummarizerService, Depends(get_summarizer)]
RateLimitDep = Annotated[str, Depends(enforce_rate_limit)]
